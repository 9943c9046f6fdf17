import os
import sys

import requests


def die(message, code=1):
    print(message)
    sys.exit(code)


def step(message):
    print("\n==> " + message)


def request(method, url, headers=None, json_body=None, expect=None):
    try:
        resp = requests.request(method, url, headers=headers, json=json_body, timeout=10)
    except Exception as exc:
        die("Request failed: %s" % exc)
    ok = resp.status_code == expect if expect else 200 <= resp.status_code < 300
    if not ok:
        print("HTTP %s %s" % (resp.status_code, resp.reason))
        print(resp.text)
        sys.exit(1)
    return resp


def invocation_headers(sender, height):
    return {"X-Sender": sender, "X-Block-Height": str(height)}


def main():
    base_url = (os.getenv("BASE_URL") or "http://127.0.0.1:8000").rstrip("/")
    owner = os.getenv("SMOKE_OWNER", "owner-addr")
    oracle = os.getenv("SMOKE_ORACLE", "oracle-addr")
    beneficiary = os.getenv("SMOKE_BENEFICIARY", "beneficiary-addr")
    height = int(os.getenv("SMOKE_BLOCK_HEIGHT", "100"))

    step("Health")
    request("GET", base_url + "/health")

    step("Instantiate")
    request(
        "POST",
        base_url + "/v1/contract/instantiate",
        headers=invocation_headers(owner, height),
        json_body={
            "region": "smoke-forest",
            "beneficiary": beneficiary,
            "oracle": oracle,
            "ecostate": 4000,
            "total_tokens": 1000,
            "payout_start_height": height,
            "payout_end_height": height + 1000,
        },
    )

    step("Oracle reports +12 points (capped payout)")
    resp = request(
        "POST",
        base_url + "/v1/contract/execute",
        headers=invocation_headers(oracle, height + 1),
        json_body={"updateecostate": {"ecostate": 5200}},
    )
    print(resp.json())

    step("Funds exhausted")
    request(
        "POST",
        base_url + "/v1/contract/execute",
        headers=invocation_headers(oracle, height + 2),
        json_body={"updateecostate": {"ecostate": 6000}},
        expect=400,
    )

    step("Query is not implemented")
    request("POST", base_url + "/v1/contract/query", json_body={"state": {}}, expect=404)

    print("\nSmoke OK")


if __name__ == "__main__":
    main()
