#!/usr/bin/env python3
"""run_demo.py — Create a pack and rehearse a short negotiation against the live API.

Usage:
    python scripts/run_demo.py --token <bearer-token>
    python scripts/run_demo.py --base-url http://localhost:8000 --token <bearer-token>
"""

from __future__ import annotations

import argparse
import sys

import httpx

DEMO_PACK = {
    "job_title": "Senior Software Engineer",
    "city_or_remote": "Seattle",
    "current_salary": 120000,
    "target_salary": 160000,
    "achievements": [
        "Led the migration of the billing platform to event sourcing",
        "Reduced p95 checkout latency by 40%",
        "Mentored three engineers through their first on-call rotation",
    ],
}

DEMO_TURNS = [
    "Thanks for making time. I'd like to talk about my compensation.",
    "This year I delivered the billing migration and cut checkout latency by 40%.",
    "My research shows the market average for my role in Seattle is well above my salary.",
    "I'm asking for $160000.",
]


def run_demo(base_url: str, token: str) -> None:
    headers = {"Authorization": f"Bearer {token}"}
    print("═" * 60)
    print(" Salary Negotiation Coach — Demo")
    print("═" * 60)
    print(f"Target: {base_url}\n")

    try:
        resp = httpx.get(f"{base_url}/api/v1/health", timeout=5)
        resp.raise_for_status()
        print(f"✅ Health check: {resp.json()}\n")
    except Exception as exc:
        print(f"❌ Health check failed: {exc}")
        print("   Make sure the server is running: uvicorn negotiator.main:app --reload")
        sys.exit(1)

    with httpx.Client(base_url=base_url, headers=headers, timeout=120) as client:
        resp = client.post("/api/v1/packs", json=DEMO_PACK)
        resp.raise_for_status()
        pack = resp.json()
        market = pack["market_data"]
        print(f"─── Pack {pack['id']}")
        print(f"  Market: ${market['p25']:,} – ${market['p75']:,} (avg ${market['average']:,})")
        print(f"  Content: {len(pack['negotiation_content'])} characters\n")

        for line in DEMO_TURNS:
            resp = client.post(f"/api/v1/roleplay/{pack['id']}", json={"message": line})
            resp.raise_for_status()
            data = resp.json()
            print(f"  Employee: {line}")
            print(f"  Manager ({data['source']}): {data['reply']}\n")

        resp = client.put(f"/api/v1/roleplay/{pack['id']}/confidence", json={"score": 7})
        resp.raise_for_status()
        session = resp.json()
        print(f"  Transcript: {len(session['messages'])} messages, confidence {session['confidence_score']}")

        resp = client.delete(f"/api/v1/packs/{pack['id']}")
        resp.raise_for_status()
        print(f"  Cleanup: {resp.json()['message']}")

    print("═" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the negotiation coach demo")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--token", required=True, help="Bearer token from the identity provider")
    args = parser.parse_args()
    run_demo(args.base_url, args.token)
