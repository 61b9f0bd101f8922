"""AES-128 with CBC, CTR, CCM and CMAC modes and a CTR-DRBG generator."""

__version__ = "0.1.0"
__all__ = ["aes", "cbc", "ccm", "cmac", "ctr", "ctr_prng", "utils"]