# -*- coding: utf-8 -*-
# pydoit task file
# see https://pydoit.org/
# run from this dir with `doit`, or `doit list`, `doit help` etc. (pip install doit 1st)

from doit.action import CmdAction

HELP_PARAM = {
    "name": "help",
    "long": "help",
    "default": False,
    "type": bool,
}


def _build_pytest_command(
    test_dir,
    keyword="",
    speed="",
    retry=False,
    print_logs=False,
    full_trace=False,
    show_time=False,
):
    """Helper function to build pytest commands for test tasks."""
    cmd = ["pytest"]

    # Add options
    if print_logs:
        cmd.append("--capture=no")
    if full_trace:
        cmd.append("--full-trace")
    if show_time:
        cmd.append("--durations=0")

    # Add common flags
    cmd.extend(["--color=yes", "-vv", "-x"])

    # Add filters
    if retry:
        cmd.append("--lf")
    if keyword:
        cmd.extend(["-k", keyword])
    if speed:
        if speed == "slow":
            cmd.extend(["-m", "slow"])
        elif speed in ["not slow", "fast"]:
            cmd.extend(["-m", '"not slow"'])
        elif speed == "all":
            pass
        else:
            raise ValueError(
                f"Invalid speed filter: {speed}. Use 'slow', 'not slow', 'fast', or 'all'"
            )

    cmd.append(test_dir)

    return " ".join(cmd)


def task_install():
    """Install framescope in editable mode, with the test extras"""
    return {
        "actions": ['pip install -e ".[test]"'],
        "verbosity": 2,
    }


def task_test_logic():
    """Run the logic test suite (test in test/logic/)."""

    def router(keyword, speed, retry, print_logs, full_trace, show_time, help=False):
        if help:
            return """echo '
Test Logic Runner Help
====================

Filter Options:
  -k, --keyword TEXT    Only run test matching the keyword expression
                        Example: -k "quick_plot and not slow"
  -s, --speed TEXT      Filter test by speed:
                        - "slow": Run only slow test
                        - "not slow" or "fast": Skip slow test
                        - "all": Run all test regardless of speed
  -r, --retry           Only run previously failed test

Output Options:
  -p, --print-logs      Print test logs to console instead of capturing
  -f, --full-trace      Show full traceback on errors
  -t, --show-time       Display duration of all test

Examples:
  doit test_logic                     # Run all test
  doit test_logic -k schema           # Run test containing "schema"
  doit test_logic -s fast -p          # Run fast test with logs
  doit test_logic --retry --show-time # Rerun failed test with timing
  '"""
        try:
            return _build_pytest_command(
                "test/logic/",
                keyword=keyword,
                speed=speed,
                retry=retry,
                print_logs=print_logs,
                full_trace=full_trace,
                show_time=show_time,
            )
        except ValueError as e:
            return f"echo 'Error: {str(e)}' && exit 1"

    return {
        "actions": [CmdAction(router)],
        "params": [
            HELP_PARAM,
            {"name": "keyword", "short": "k", "default": ""},
            {"name": "speed", "short": "s", "default": ""},
            {"name": "retry", "short": "r", "default": False, "type": bool},
            {"name": "print_logs", "short": "p", "default": False, "type": bool},
            {"name": "full_trace", "short": "f", "default": False, "type": bool},
            {"name": "show_time", "short": "t", "default": False, "type": bool},
        ],
        "verbosity": 2,
    }


def task_format():
    """Format code using ruff."""

    def router(help=False):
        if help:
            return """echo '
Code Formatter Help
=================

Runs ruff to sort imports and format:
- src/framescope/
- test/
- examples/
- dodo.py

No options required - simply run:
  doit format
  '"""
        targets = ["src/framescope", "test/", "examples/", "dodo.py"]
        actions = []
        for target in targets:
            actions.append(f"ruff check --select I --fix {target}")
            actions.append(f"ruff format {target}")
        return " && ".join(actions)

    return {
        "actions": [CmdAction(router)],
        "params": [HELP_PARAM],
        "verbosity": 2,
    }


def task_docs():
    """Generate documentation using pdoc3."""

    def router(help=False):
        if help:
            return """echo '
Documentation Generator Help
==========================

Runs pdoc3 to generate HTML documentation for the framescope package
into docs/ (templates in docs/ are used if present).

No options required - simply run:
  doit docs
  '"""
        return "pdoc3 --output-dir docs/ --html --template-dir docs/ --force --skip-errors ./src/framescope/"

    return {
        "actions": [CmdAction(router)],
        "params": [HELP_PARAM],
        "verbosity": 2,
    }
