import httpx
import asyncio
import os
import sys

BASE_URL = os.environ.get("GOLINKS_BASE_URL", "http://localhost:3030")
API_TOKEN = os.environ.get("GOLINKS_API_TOKEN")


async def run_verification() -> bool:
    print(f"🚀  Starting Verification against {BASE_URL}...\n")

    headers = {"Authorization": f"Bearer {API_TOKEN}"} if API_TOKEN else {}
    short_link = "go/verify-test"

    async with httpx.AsyncClient(base_url=BASE_URL, timeout=10.0, headers=headers) as client:
        # 1. Health Check
        print("1. [Health] Checking /health...")
        try:
            resp = await client.get("/health")
        except httpx.HTTPError as e:
            print(f"   ❌  Connection Error: {e}")
            return False
        if resp.status_code != 200 or resp.json() != {"status": "ok"}:
            print(f"   ❌  Health Check Failed: {resp.text}")
            return False
        print("   ✅  Health Check Passed")

        # Cleanup first if exists
        await client.delete(f"/golinks/{short_link}")

        # 2. Create
        print("\n2. [API] Creating Golink...")
        resp = await client.post("/golinks", json={"short_link": short_link, "url": "https://www.example.com"})
        if resp.status_code != 201:
            print(f"   ❌  Create Failed: {resp.status_code} {resp.text}")
            return False
        created = resp.json()
        print(f"   ✅  Created: {created['short_link']} -> {created['url']}")

        # 3. Duplicate
        print("\n3. [API] Verifying Conflict on duplicate...")
        resp = await client.post("/golinks", json={"short_link": short_link, "url": "https://other.example.com"})
        if resp.status_code == 409:
            print("   ✅  Duplicate rejected")
        else:
            print(f"   ❌  Expected 409, got {resp.status_code}")

        # 4. Redirect
        print("\n4. [API] Verifying Redirect...")
        resp = await client.get(f"/{short_link}", follow_redirects=False)
        if resp.status_code == 307 and resp.headers.get("location") == "https://www.example.com":
            print(f"   ✅  Redirect Location matches: {resp.headers['location']}")
        else:
            print(f"   ❌  Redirect Failed: {resp.status_code} {resp.headers.get('location')}")

        # 5. Pagination
        print("\n5. [API] Verifying Pagination...")
        resp = await client.get("/golinks", params={"page": 1, "page_size": 1})
        body = resp.json()
        if resp.status_code == 200 and "pagination" in body and len(body["data"]) <= 1:
            print(f"   ✅  Pagination: {body['pagination']}")
        else:
            print(f"   ❌  Pagination Failed: {resp.status_code} {resp.text}")

        # 6. Update
        print("\n6. [API] Updating URL...")
        resp = await client.put(f"/golinks/{short_link}", json={"url": "https://www.example.com/updated"})
        if resp.status_code == 200 and resp.json()["created_at"] == created["created_at"]:
            print(f"   ✅  Updated: {resp.json()['url']}")
        else:
            print(f"   ❌  Update Failed: {resp.status_code} {resp.text}")

        # 7. Delete
        print("\n7. [API] Deleting...")
        resp = await client.delete(f"/golinks/{short_link}")
        gone = await client.get(f"/golinks/{short_link}")
        if resp.status_code == 200 and gone.status_code == 404:
            print("   ✅  Deleted")
        else:
            print(f"   ❌  Delete Failed: {resp.status_code} / {gone.status_code}")

        # 8. Metrics
        print("\n8. [Observability] Verifying Metrics...")
        resp = await client.get("/metrics")
        if resp.status_code == 200 and "http_requests_total" in resp.text:
            print("   ✅  Metrics Endpoint Exposed")
        else:
            print(f"   ❌  Metrics Failed: {resp.status_code}")

    print("\n✨ Verification Complete!")
    return True


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(run_verification()) else 1)
