[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "worldsim"
version = "0.1.0"
description = "Building blocks for an agent-based world simulation: voxel grid, agents, economy, politics and goal-oriented planning"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "agents", "goap", "economy", "voxel", "pathfinding", "event-bus"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["worldsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
