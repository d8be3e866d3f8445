"""
Service Floor Simulation Script

Simulates many waiters entering orders at once against a running
dashboard (development mode): each session signs in, opens a draft,
adds and removes menu items, submits, then closes the draft.
Run from project root: python scripts/simulate.py
"""

import asyncio
import random
import time
import argparse
import uuid
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8001"
TOTAL_SESSIONS = 50

WAITERS = ["Sarah Elizabeth", "Lisa Marie", "Thomas James", "Emma Grace"]
TABLES = [str(n) for n in range(1, 21)]
NOTES = ["", "Birthday table", "Allergic to nuts", "Window seat", "Rush order"]


async def sign_in(client: httpx.AsyncClient) -> dict[str, str]:
    """Create a throwaway account and return auth headers."""
    email = f"waiter_{uuid.uuid4().hex[:8]}@restaurant.com"
    password = "simulate123"

    await client.post(f"{API_BASE_URL}/api/auth/sign-up", json={"email": email, "password": password})
    response = await client.post(f"{API_BASE_URL}/api/auth/sign-in", json={"email": email, "password": password})
    response.raise_for_status()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def run_session(
    client: httpx.AsyncClient,
    headers: dict[str, str],
    menu_ids: list[str],
    session_num: int,
) -> dict[str, Any]:
    """Drive one draft from open to submit, then close it."""
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/api/drafts", json={}, headers=headers)
        response.raise_for_status()
        draft_id = response.json()["draft_id"]
        draft_url = f"{API_BASE_URL}/api/drafts/{draft_id}"

        await client.patch(draft_url, headers=headers, json={
            "selected_table": random.choice(TABLES),
            "selected_waiter": random.choice(WAITERS),
            "special_note": random.choice(NOTES),
        })

        for _ in range(random.randint(1, 6)):
            await client.post(f"{draft_url}/items", headers=headers, json={"menu_item_id": random.choice(menu_ids)})

        # Occasionally take something back off the order
        if random.random() < 0.3:
            await client.delete(f"{draft_url}/items/{random.choice(menu_ids)}", headers=headers)

        response = await client.post(f"{draft_url}/submit", headers=headers, json={})
        await client.delete(draft_url, headers=headers)
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 200:
            data = response.json()
            return {
                "session_num": session_num,
                "success": True,
                "order_id": data.get("order_id"),
                "total": data.get("total_amount"),
                "time": elapsed,
            }
        return {
            "session_num": session_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }

    except httpx.HTTPError as e:
        return {
            "session_num": session_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(num_sessions: int = TOTAL_SESSIONS) -> dict[str, Any]:
    """Run all sessions concurrently and print a summary."""
    print("=" * 70)
    print("🍽️  SERVICE FLOOR SIMULATION")
    print("=" * 70)
    print(f"📋 Sessions: {num_sessions}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient(timeout=30.0) as client:
        headers = await sign_in(client)
        menu = await client.get(f"{API_BASE_URL}/api/menu", headers=headers)
        menu.raise_for_status()
        menu_ids = [item["id"] for item in menu.json()["items"]]

        tasks = [run_session(client, headers, menu_ids, i + 1) for i in range(num_sessions)]
        results = await asyncio.gather(*tasks)

    total_time = round(time.time() - start_time, 2)
    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print(f"\n✅ Submitted: {len(successful)}/{num_sessions}")
    print(f"❌ Rejected: {len(failed)}/{num_sessions}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        total_revenue = sum(r.get("total", 0) for r in successful)
        print(f"\n📈 Average Session: {avg_time}s")
        print(f"   💰 Total Revenue: ${total_revenue:.2f}")

    if failed:
        print("\n⚠️  Rejected Session Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Session #{f['session_num']}: {f.get('error', 'Unknown error')}")

    return {
        "total": num_sessions,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Service Floor Simulation Script")
    parser.add_argument("--sessions", type=int, default=TOTAL_SESSIONS, help="Number of order sessions")
    args = parser.parse_args()

    asyncio.run(run_simulation(args.sessions))
