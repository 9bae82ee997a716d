"""
Terminal client for a running goal orchestrator server.

Architectural role:
- Sends one goal to `POST /execute-goal` and renders the per-subtask results.
- Holds no orchestration logic; everything runs server-side.

Request lifecycle:
1. Take the goal from argv, or prompt on stdin when none is given.
2. POST `{"goal": ...}` to the server.
3. Print one line per subtask result, or the server's error body.

Error handling strategy:
- Connection failures and non-2xx responses print an error and exit with 1.
- EOF and keyboard interrupts at the prompt exit quietly.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import json
import os
import sys

import requests

DEFAULT_SERVER_URL = os.getenv("ORCHESTRATOR_BASE_URL", "http://localhost:5000")
REQUEST_TIMEOUT_SECONDS = 300


def format_result(index: int, result: dict) -> str:
    """Render one execution result as a single line."""
    status = result.get("result", "?")
    if status == "Success":
        payload = json.dumps(result.get("data"), ensure_ascii=False, default=str)
        return f"[{index}] {status}: {payload}"
    return f"[{index}] {status}: {result.get('error', '')}"


def submit_goal(goal: str, server_url: str = DEFAULT_SERVER_URL) -> dict:
    """POST a goal and return the decoded response body.

    Raises:
        requests.exceptions.RequestException: On transport failure or non-2xx status.
    """
    response = requests.post(
        f"{server_url.rstrip('/')}/execute-goal",
        json={"goal": goal},
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    return response.json()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Submit a goal to the orchestrator.")
    parser.add_argument("goal", nargs="*", help="Goal text (prompted when omitted)")
    parser.add_argument("--url", default=DEFAULT_SERVER_URL, help="Server base URL")
    args = parser.parse_args(argv)

    goal = " ".join(args.goal).strip()
    if not goal:
        try:
            goal = input("Goal: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

    if not goal:
        print("No goal given.", file=sys.stderr)
        return 1

    try:
        body = submit_goal(goal, args.url)
    except requests.exceptions.HTTPError as err:
        print(f"Server error: {err.response.text}", file=sys.stderr)
        return 1
    except requests.exceptions.RequestException as err:
        print(f"Request failed: {err}", file=sys.stderr)
        return 1

    print(body.get("message", ""))
    print("-" * 60)
    for index, result in enumerate(body.get("results", []), start=1):
        print(format_result(index, result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
