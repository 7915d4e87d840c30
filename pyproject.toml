[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mflash-studio"
version = "0.1.4"
description = "Deck, card, asset and schema-text editing logic for local-first .mflash flashcard decks."
requires-python = ">=3.10"
dependencies = []
keywords = ["flashcards", "mflash", "deck", "study", "vocabulary"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mflash_studio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
