[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qubitcrypt"
version = "0.1.0"
description = "Digital signature algorithms (RSA, ECDSA, EdDSA, ML-DSA, SLH-DSA) behind one interface"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "cryptography",
    "signature",
    "post-quantum",
    "ml-dsa",
    "slh-dsa",
    "ecdsa",
    "eddsa",
    "rsa",
]
classifiers = [
    "Development Status :: 3 - Alpha",
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
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["qubitcrypt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
