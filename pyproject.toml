[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "suffixfqdn"
version = "1.0.0"
description = "Extract the registrable domain from URLs using the Public Suffix List"
requires-python = ">=3.10"
dependencies = []
keywords = ["public suffix list", "etld", "tld", "domain", "fqdn", "url", "origin"]
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
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
suffixfqdn = "suffixfqdn.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["suffixfqdn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
