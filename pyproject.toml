[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smallcrypt"
version = "0.1.0"
description = "Compact pure-Python AES-128 with CBC, CTR, CCM and CMAC modes and a CTR-DRBG generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["aes", "cbc", "ctr", "ccm", "cmac", "drbg", "cryptography"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["smallcrypt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
