#!/usr/bin/env python3
"""
Run every example script and print a pass/fail summary.
"""

import os
import subprocess
import sys
import time

EXAMPLES = [
    ("example_1_burglary.py", "Exact and approximate inference (burglary)"),
    ("example_2_sprinkler_convergence.py", "Sampling convergence (sprinkler)"),
]

HERE = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.dirname(HERE)


def run_example(script_name):
    """Run one script from the repository root; return (ok, seconds, stderr tail)."""
    start = time.time()
    try:
        result = subprocess.run(
            [sys.executable, os.path.join(HERE, script_name)],
            cwd=ROOT,
            env={**os.environ, "PYTHONPATH": ROOT},
            capture_output=True,
            text=True,
            timeout=600,
        )
    except subprocess.TimeoutExpired:
        return False, time.time() - start, "Timeout after 10 minutes"
    elapsed = time.time() - start
    if result.returncode != 0:
        return False, elapsed, "\n".join(result.stderr.strip().splitlines()[-10:])
    for line in result.stdout.strip().splitlines()[-4:]:
        if line.strip():
            print(f"  {line}")
    return True, elapsed, None


def main():
    print("=" * 70)
    print("bninfer example scripts")
    print("=" * 70)

    results = []
    for script, description in EXAMPLES:
        print(f"\n--- {description} ({script})")
        ok, elapsed, error = run_example(script)
        results.append((description, ok, elapsed, error))

    print("\n" + "=" * 70)
    for description, ok, elapsed, error in results:
        print(f"{'Pass' if ok else 'Fail':8} {description:50} ({elapsed:6.2f}s)")
        if error:
            print(f"         {error}")
    passed = sum(1 for _, ok, _, _ in results if ok)
    print(f"Total: {passed}/{len(results)} examples passed")
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
