import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import requests
import concurrent.futures
import argparse
from collections import Counter

BASE = os.environ.get("STOREFRONT_BASE", "http://127.0.0.1:8000")
COOKIE = os.environ.get("STOREFRONT_SESSION_COOKIE", "admin-session")


def login(password):
    s = requests.Session()
    r = s.post(f"{BASE}/api/admin/login", json={"password": password}, timeout=10)
    if r.status_code != 200:
        raise SystemExit(f"login failed: {r.status_code} {r.text}")
    return s.cookies.get(COOKIE)


def create_task(i, token, slug):
    payload = {"name": f"Race {i}", "slug": slug, "price": 1}
    try:
        r = requests.post(
            f"{BASE}/api/admin/products",
            json=payload,
            cookies={COOKIE: token},
            timeout=20,
        )
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def run_create_concurrent(workers, token, slug):
    print(f"Running create test: workers={workers}, slug={slug}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(create_task, i, token, slug) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    counts = Counter(r[1] for r in results)
    print("Status counts:", dict(counts))
    if counts.get(201) != 1:
        print("UNEXPECTED: expected exactly one 201")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent creates of one slug; expect exactly one success.")
    parser.add_argument("--slug", default="race-slug")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--password", default=os.environ.get("STOREFRONT_ADMIN_PASSWORD"))
    args = parser.parse_args()
    if not args.password:
        raise SystemExit("pass --password or set STOREFRONT_ADMIN_PASSWORD")

    run_create_concurrent(args.workers, login(args.password), args.slug)
