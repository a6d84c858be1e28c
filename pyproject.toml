[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cryptonews"
version = "0.1.0"
description = "A small web service that gathers recent cryptocurrency news from NewsAPI and CoinDesk."
requires-python = ">=3.10"
keywords = ["cryptocurrency", "news", "bitcoin", "ethereum", "aiohttp", "rate-limit"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
]
dependencies = [
    "aiohttp>=3.9",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

[project.scripts]
cryptonews = "cryptonews.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cryptonews"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
