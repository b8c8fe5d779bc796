# client.py
#
# Drive a running rover server from the command line:
#   python client.py                      -> new session, print state
#   python client.py "FW3 TR FW2"         -> run commands on the current session
#   python client.py --plan TOP 5 5       -> plan a route and run it
import argparse
import json

import requests

SERVER_URL = "http://localhost:5000"
TIMEOUT = 10  # HTTP request timeout in seconds


def post(path: str, payload: dict) -> dict:
    response = requests.post(f"{SERVER_URL}{path}", json=payload, timeout=TIMEOUT)
    response.raise_for_status()
    return response.json()


def get(path: str) -> dict:
    response = requests.get(f"{SERVER_URL}{path}", timeout=TIMEOUT)
    response.raise_for_status()
    return response.json()


def main():
    parser = argparse.ArgumentParser(description="Cube planet rover client")
    parser.add_argument("commands", nargs="?", help='Command string, e.g. "FW3 TR FW2"')
    parser.add_argument("--new", action="store_true", help="Start a new session first")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--plan", nargs=3, metavar=("FACE", "X", "Y"),
                        help="Plan a route to FACE X Y and drive it")
    args = parser.parse_args()

    if args.new or not (args.commands or args.plan):
        session = post("/session", {"face": "FRONT", "x": 5, "y": 5, "heading": "N", "seed": args.seed})
        print(f"Session started with {session['obstacle_count']} obstacles")

    if args.plan:
        face, x, y = args.plan
        plan = post("/plan", {"face": face, "x": int(x), "y": int(y)})
        if not plan["reachable"]:
            print(f"{face} ({x}, {y}) is not reachable")
            return
        print(f"Route ({plan['cost']:.0f}): {' '.join(plan['commands'])}")
        args.commands = " ".join(plan["commands"])

    if args.commands:
        result = post("/commands", {"commands": args.commands})
        if result["blocked"]:
            print("Blocked by an obstacle!")
        print(json.dumps(result["final_state"], indent=2))
    else:
        print(json.dumps(get("/state"), indent=2))


if __name__ == "__main__":
    main()
