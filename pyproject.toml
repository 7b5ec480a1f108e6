[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "piedpiper"
version = "0.1.0"
description = "Toy compression, hashing and cipher tools: Huffman, arithmetic coding, BWT, RLE and cellular-automaton ciphers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "compression",
    "huffman",
    "adaptive-huffman",
    "arithmetic-coding",
    "burrows-wheeler",
    "run-length-encoding",
    "cellular-automaton",
    "hash",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Security :: Cryptography",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
piedpiper-ca-cipher = "piedpiper.ca_cipher:main"
piedpiper-hash = "piedpiper.pphash:main"
piedpiper-adaptive-huffman = "piedpiper.adaptive_huffman:main"
piedpiper-huffman-compress = "piedpiper.huffman_files:compress_main"
piedpiper-huffman-decompress = "piedpiper.huffman_files:decompress_main"
piedpiper-bwt = "piedpiper.bwt:main"
piedpiper-arith-compress = "piedpiper.arithmetic:compress_main"
piedpiper-arith-decompress = "piedpiper.arithmetic:decompress_main"
piedpiper-arith32 = "piedpiper.arith32:main"
piedpiper-shell-client = "piedpiper.shell_client:main"
piedpiper-shell-server = "piedpiper.shell_server:main"

[tool.hatch.build.targets.wheel]
packages = ["piedpiper"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
