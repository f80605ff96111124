#!/usr/bin/env python3
"""
MemVCS Interactive Demo
=======================

Walks through a small configuration-tuning session entirely in memory.

Demonstrates:
  - add / remove / commit on the default branch
  - head and log
  - forking a branch and diverging from it
  - checking out an earlier commit (detached view)
  - branch management (list / checkout / remove)

Usage:
    python demo/run_demo.py
"""

from __future__ import annotations

import os
import platform
import sys
import textwrap

from memvcs import OperationResult, Repository

# ── ANSI Colors ──────────────────────────────────────────────────────────────

BOLD = "\033[1m"
DIM = "\033[2m"
GREEN = "\033[92m"
CYAN = "\033[96m"
YELLOW = "\033[93m"
MAGENTA = "\033[95m"
RESET = "\033[0m"

# Detect Windows console
if platform.system() == "Windows":
    os.system("")  # enable ANSI on Windows


# ── Helpers ──────────────────────────────────────────────────────────────────

def banner(text: str) -> None:
    """Print a prominent section banner."""
    width = 72
    print()
    print(f"{MAGENTA}{'═' * width}")
    print(f"  {BOLD}{text}{RESET}{MAGENTA}")
    print(f"{'═' * width}{RESET}")
    print()


def narrate(text: str) -> None:
    """Print narrative / explanation text."""
    for line in textwrap.wrap(text, width=70):
        print(f"  {DIM}{line}{RESET}")
    print()


def show(call: str, result: OperationResult) -> OperationResult:
    """Print a call and its result, then return the result."""
    print(f"  {CYAN}>>> {call}{RESET}")
    color = GREEN if result.success else YELLOW
    for line in result.message.rstrip("\n").splitlines():
        print(f"  {color}{line}{RESET}")
    print()
    return result


def pause() -> None:
    """Wait for Enter when running interactively."""
    if sys.stdin.isatty():
        input(f"  {DIM}[Enter to continue]{RESET}")


# ── Steps ────────────────────────────────────────────────────────────────────

def step_1_stage_and_commit(repo: Repository) -> None:
    banner("Step 1: Stage objects and commit")
    narrate(
        "Objects are staged by name. Re-adding a name replaces the staged "
        "value. A commit freezes a copy of the staging area."
    )
    show('repo.get("timeout")', repo.get("timeout"))
    show('repo.add("timeout", 30)', repo.add("timeout", 30))
    show('repo.add("retries", 3)', repo.add("retries", 3))
    show('repo.add("timeout", 45)', repo.add("timeout", 45))
    show('repo.commit("Initial settings")', repo.commit("Initial settings"))
    show('repo.commit("Again?")', repo.commit("Again?"))
    pause()


def step_2_history(repo: Repository) -> None:
    banner("Step 2: Inspect head and history")
    show('repo.remove("retries")', repo.remove("retries"))
    show('repo.add("backoff", "exponential")', repo.add("backoff", "exponential"))
    show('repo.commit("Switch to backoff")', repo.commit("Switch to backoff"))
    show("repo.head()", repo.head())
    show("repo.log()", repo.log())
    pause()


def step_3_fork(repo: Repository) -> None:
    banner("Step 3: Fork a branch")
    narrate(
        "A new branch shares every commit of the active branch so far. "
        "Commits made afterwards belong to one branch only."
    )
    show('repo.create("aggressive")', repo.create("aggressive"))
    show('repo.branch().checkout("aggressive")', repo.branch().checkout("aggressive"))
    show(
        'repo.add("timeout", 5).commit("Short timeout")',
        repo.add("timeout", 5).commit("Short timeout"),
    )
    show("repo.list()", repo.list())
    show('repo.get("timeout")', repo.get("timeout"))
    show('repo.checkout_branch("master").get("timeout")', repo.checkout_branch("master").get("timeout"))
    pause()


def step_4_detached(repo: Repository) -> None:
    banner("Step 4: Check out an earlier commit")
    first = repo.current_branch.history[0]
    show(f'repo.checkout("{first.hash[:7]}...")', repo.checkout(first.hash))
    show('repo.get("retries")', repo.get("retries"))
    show('repo.get("backoff")', repo.get("backoff"))
    pause()


def step_5_cleanup(repo: Repository) -> None:
    banner("Step 5: Branch management")
    show('repo.branch().remove("master")', repo.branch().remove("master"))
    show('repo.branch().remove("aggressive")', repo.branch().remove("aggressive"))
    show("repo.branch().list()", repo.branch().list())


def main() -> None:
    banner("MemVCS Demo: tuning a retry policy")
    repo = Repository()
    step_1_stage_and_commit(repo)
    step_2_history(repo)
    step_3_fork(repo)
    step_4_detached(repo)
    step_5_cleanup(repo)
    print(f"  {BOLD}Done.{RESET}")


if __name__ == "__main__":
    main()
