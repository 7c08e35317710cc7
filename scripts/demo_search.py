#!/usr/bin/env python3
"""
Demo - semantic place search

Steps:
1. Health check (index status)
2. Run a few queries against POST /search

Usage:
    python scripts/demo_search.py
    python scripts/demo_search.py --base-url http://your-server:3001 --query "night market"
"""

import argparse
import sys
import time

import requests

# ANSI colors
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
RED = "\033[91m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEFAULT_QUERIES = ["historic palace", "street food market", "quiet beach"]


def print_step(n: int, msg: str):
    print(f"\n{CYAN}{'='*60}{RESET}")
    print(f"{BOLD}Step {n}: {msg}{RESET}")
    print(f"{CYAN}{'='*60}{RESET}")


def print_ok(msg: str):
    print(f"{GREEN}✓ {msg}{RESET}")


def print_warn(msg: str):
    print(f"{YELLOW}⚠ {msg}{RESET}")


def print_error(msg: str):
    print(f"{RED}✗ {msg}{RESET}")


def demo(base_url: str, queries: list[str], top_k: int) -> bool:
    """Run the search demo."""

    print(f"\n{BOLD}Travel AI Server - Search Demo{RESET}")
    print(f"Base URL: {base_url}\n")

    start = time.time()

    print_step(1, "Health Check")

    try:
        resp = requests.get(f"{base_url}/health", timeout=10)
        resp.raise_for_status()
        data = resp.json()

        print_ok(f"Status: {data.get('status', 'unknown')}")
        settings = data.get("settings", {})
        print(f"   • Embedding model: {settings.get('embedding_model', 'N/A')}")
        print(f"   • Index file: {settings.get('embeddings_path', 'N/A')}")

    except requests.exceptions.ConnectionError:
        print_error(f"Cannot connect to {base_url}")
        print("   Make sure the server is running:")
        print("   $ uvicorn ai_server.main:app --port 3001")
        return False

    print_step(2, "Search")

    for query in queries:
        resp = requests.post(
            f"{base_url}/search",
            json={"query": query, "top_k": top_k},
            timeout=60,
        )
        if resp.status_code == 503:
            print_error(f"Embedding model unavailable: {resp.json().get('detail')}")
            return False
        resp.raise_for_status()

        results = resp.json()["results"]
        if not results:
            print_warn(f'"{query}": no results (has the index been built?)')
            continue

        print_ok(f'"{query}":')
        for r in results:
            print(f"   • {r['name']} ({r['slug']}) - {r['similarity']:.3f}")

    elapsed = time.time() - start
    print(f"\n{CYAN}{'='*60}{RESET}")
    print(f"{GREEN}✓ Demo completed in {elapsed:.1f}s{RESET}")
    print(f"{CYAN}{'='*60}{RESET}")
    return True


def main():
    parser = argparse.ArgumentParser(description="Travel AI search demo")
    parser.add_argument(
        "--base-url",
        default="http://localhost:3001",
        help="Base URL of the API (default: http://localhost:3001)",
    )
    parser.add_argument("--query", action="append", help="Query to run (repeatable)")
    parser.add_argument("--top-k", type=int, default=3)
    args = parser.parse_args()

    success = demo(args.base_url, args.query or DEFAULT_QUERIES, args.top_k)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
