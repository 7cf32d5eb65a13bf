import os
import sys

import requests

base_url = os.getenv("PARTSFLOW_BASE_URL", "http://localhost:8000").rstrip("/")


def main() -> int:
    ready_response = requests.get(f"{base_url}/ready", timeout=15)
    ready_response.raise_for_status()
    if not ready_response.json().get("ok"):
        print("Service is up but storage is not ready", file=sys.stderr)
        return 1

    stats_response = requests.get(f"{base_url}/api/stats", timeout=15)
    stats_response.raise_for_status()

    low_stock_response = requests.get(f"{base_url}/api/parts/low-stock", timeout=15)
    low_stock_response.raise_for_status()

    stats = stats_response.json()
    low_stock = low_stock_response.json()
    print(f"Parts: {stats['totalParts']} (value {stats['totalValue']})")
    print(f"Low stock: {stats['lowStockCount']}")
    for part in low_stock[:5]:
        print(f"  {part['partNumber']}: {part['quantity']} / min {part['minimumStock']}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except requests.RequestException as exc:
        print(f"API probe failed: {exc}", file=sys.stderr)
        raise SystemExit(1)
