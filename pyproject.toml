[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcpsched"
version = "0.1.0"
description = "Launch commands from a file and schedule them round-robin with POSIX signals"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "round-robin", "signals", "processes", "procfs"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mcpsched-launch = "mcpsched.launcher:launch_main"
mcpsched-signals = "mcpsched.launcher:signals_main"
mcpsched-roundrobin = "mcpsched.scheduler:round_robin_main"
mcpsched-monitor = "mcpsched.scheduler:monitor_main"
mcpsched-cpubound = "mcpsched.workloads:cpubound_main"
mcpsched-iobound = "mcpsched.workloads:iobound_main"

[tool.hatch.build.targets.wheel]
packages = ["mcpsched"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
