#!/usr/bin/env python3
"""Simple CLI for inspecting and driving swaps on a local cnd"""

import argparse
import asyncio
import sys
from typing import Optional

import httpx

from comit_client.config import settings
from comit_client.core.errors import CndClientError, Problem
from comit_client.core.polling import PollConfig, SwapPoller
from comit_client.logging_config import setup_logging
from comit_client.providers.cnd import Cnd
from comit_client.types import SwapResource


def print_swap(swap: SwapResource) -> None:
    """Pretty print a swap resource"""
    print(f"State: {swap.state or 'unknown'}")
    if swap.self_href:
        print(f"Self:  {swap.self_href}")

    if swap.actions:
        print("\nActions:")
        print("-" * 50)
        for action in swap.actions:
            print(f"  {action.name:<10} {action.method:<6} {action.href}")
            for field in action.fields:
                filled = f"= {field.value}" if field.is_prefilled else f"<{field.hint.kind.value}>"
                print(f"      {field.name} {filled}")

    links = {rel: href for rel, href in swap.links.items() if rel != "self"}
    if links:
        print("\nLinks:")
        for rel, href in links.items():
            print(f"  {rel:<10} {href}")


def print_problem(problem: Problem) -> None:
    print(f"❌ {problem.status} {problem.title}")
    if problem.detail:
        print(f"   {problem.detail}")


async def cli_info(cnd: Cnd) -> None:
    peer_id = await cnd.get_peer_id()
    addresses = await cnd.get_peer_listen_addresses()
    print(f"Peer id: {peer_id}")
    for address in addresses:
        print(f"  listening on {address}")


async def cli_swap(cnd: Cnd, url: str) -> None:
    swap = await cnd.fetch_swap(url)
    print_swap(swap)


async def cli_poll(cnd: Cnd, url: str, state: str, interval_ms: Optional[int], timeout_ms: Optional[int]) -> None:
    overrides = {}
    if interval_ms is not None:
        overrides["poll_interval_ms"] = interval_ms
    if timeout_ms is not None:
        overrides["timeout_ms"] = timeout_ms

    print(f"⏳ Waiting for {url} to reach {state}...")
    swap = await SwapPoller(cnd, PollConfig(**overrides)).until(url, state)
    print("✅ Reached target state")
    print_swap(swap)


async def cli_dial(cnd: Cnd, other_url: str) -> None:
    async with Cnd(other_url) as other:
        await cnd.dial(other)
    print(f"📞 Dialed {other_url}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="cnd swap client CLI")
    parser.add_argument("--cnd-url", default=None, help=f"cnd REST API (default: {settings.cnd_url})")
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("info", help="Show peer id and listen addresses")

    swap_parser = subparsers.add_parser("swap", help="Show a swap's state and available actions")
    swap_parser.add_argument("url", help="Swap URL or path, e.g. /swaps/<id>")

    poll_parser = subparsers.add_parser("poll", help="Poll a swap until it reaches a state")
    poll_parser.add_argument("url", help="Swap URL or path")
    poll_parser.add_argument("state", help="Target state, e.g. Accepted")
    poll_parser.add_argument("--interval-ms", type=int, help="Delay between polls")
    poll_parser.add_argument("--timeout-ms", type=int, help="Total polling budget")

    dial_parser = subparsers.add_parser("dial", help="Dial another cnd")
    dial_parser.add_argument("other_url", help="REST API URL of the other cnd")

    return parser


async def run(args: argparse.Namespace) -> int:
    async with Cnd(args.cnd_url) as cnd:
        try:
            if args.command == "info":
                await cli_info(cnd)
            elif args.command == "swap":
                await cli_swap(cnd, args.url)
            elif args.command == "poll":
                await cli_poll(cnd, args.url, args.state, args.interval_ms, args.timeout_ms)
            elif args.command == "dial":
                await cli_dial(cnd, args.other_url)
        except Problem as problem:
            print_problem(problem)
            return 1
        except CndClientError as exc:
            print(f"❌ Error: {exc.message}")
            return 1
        except httpx.RequestError as exc:
            print(f"❌ Could not reach cnd at {cnd.base_url}: {exc}")
            return 2
    return 0


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
