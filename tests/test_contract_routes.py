from tests.conftest import (
    BENEFICIARY,
    END_HEIGHT,
    ORACLE,
    OWNER,
    STRANGER,
    init_payload,
    invocation_headers,
)


def _execute(client, sender, msg, height=200):
    return client.post("/v1/contract/execute", json=msg, headers=invocation_headers(sender, height))


def test_instantiate_returns_empty_response(client):
    r = client.post("/v1/contract/instantiate", json=init_payload(), headers=invocation_headers(OWNER))
    assert r.status_code == 200, r.text
    assert r.json() == {"messages": [], "log": [], "data": None}


def test_instantiate_expired_returns_400(client):
    r = client.post(
        "/v1/contract/instantiate",
        json=init_payload(),
        headers=invocation_headers(OWNER, END_HEIGHT + 1),
    )
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "creating expired contract"

    # nothing persisted: execute still sees an uninitialized contract
    r2 = _execute(client, OWNER, {"lock": {}})
    assert r2.status_code == 404, r2.text
    assert r2.json()["detail"] == "NOT_FOUND"


def test_payout_flow(instantiated_client):
    r = _execute(instantiated_client, ORACLE, {"updateecostate": {"ecostate": 5200}})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["messages"] == [
        {
            "send": {
                "from_address": "cosmos1contract",
                "to_address": BENEFICIARY,
                "amount": [{"amount": "1000", "denom": "utree"}],
            }
        }
    ]
    assert {"key": "action", "value": "payout"} in body["log"]

    r2 = _execute(instantiated_client, ORACLE, {"updateecostate": {"ecostate": 6000}})
    assert r2.status_code == 400, r2.text
    assert r2.json()["detail"] == "No more funds available"


def test_insufficient_improvement(instantiated_client):
    r = _execute(instantiated_client, ORACLE, {"updateecostate": {"ecostate": 4050}})
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "Not enough improvement for payout"


def test_non_oracle_update_is_401(instantiated_client):
    r = _execute(instantiated_client, STRANGER, {"updateecostate": {"ecostate": 5200}})
    assert r.status_code == 401, r.text
    assert r.json()["detail"] == "UNAUTHORIZED"


def test_lock_log_and_second_lock(instantiated_client):
    r = _execute(instantiated_client, OWNER, {"lock": {}})
    assert r.status_code == 200, r.text
    assert r.json()["log"] == [
        {"key": "action", "value": "lock"},
        {"key": "account", "value": OWNER},
    ]

    r2 = _execute(instantiated_client, OWNER, {"lock": {}})
    assert r2.status_code == 400, r2.text
    assert r2.json()["detail"] == "contract already locked"

    r3 = _execute(instantiated_client, ORACLE, {"updateecostate": {"ecostate": 5200}})
    assert r3.status_code == 400, r3.text
    assert r3.json()["detail"] == "contract is locked. no payout possible"


def test_change_beneficiary_and_transfer_ownership(instantiated_client):
    r = _execute(instantiated_client, BENEFICIARY, {"changebeneficiary": {"beneficiary": "cosmos1next"}})
    assert r.status_code == 200, r.text
    assert {"key": "action", "value": "change_beneficiary"} in r.json()["log"]

    r2 = _execute(instantiated_client, OWNER, {"transferownership": {"owner": "cosmos1newowner"}})
    assert r2.status_code == 200, r2.text
    assert {"key": "action", "value": "change_owner"} in r2.json()["log"]

    r3 = _execute(instantiated_client, ORACLE, {"updateecostate": {"ecostate": 4100}})
    assert r3.status_code == 200, r3.text
    assert r3.json()["messages"][0]["send"]["to_address"] == "cosmos1next"


def test_query_is_not_implemented(instantiated_client):
    for msg in ({"state": {}}, {"balance": {"address": BENEFICIARY}}):
        r = instantiated_client.post("/v1/contract/query", json=msg)
        assert r.status_code == 404, r.text
        assert r.json()["detail"] == "NOT_IMPLEMENTED"


def test_missing_sender_header(instantiated_client):
    r = instantiated_client.post("/v1/contract/execute", json={"lock": {}}, headers={"X-Block-Height": "1"})
    assert r.status_code == 401, r.text
    assert r.json()["detail"] == "SENDER_REQUIRED"


def test_invalid_block_height_header(instantiated_client):
    r = instantiated_client.post(
        "/v1/contract/execute",
        json={"lock": {}},
        headers={"X-Sender": OWNER, "X-Block-Height": "tomorrow"},
    )
    assert r.status_code == 422, r.text
    assert r.json()["detail"] == "INVALID_BLOCK_HEIGHT"


def test_unknown_command_is_422(instantiated_client):
    r = _execute(instantiated_client, OWNER, {"selfdestruct": {}})
    assert r.status_code == 422, r.text


def test_metrics_exposes_contract_counters(instantiated_client):
    _execute(instantiated_client, ORACLE, {"updateecostate": {"ecostate": 4100}})
    r = instantiated_client.get("/metrics")
    assert r.status_code == 200, r.text
    assert 'contract_invocations_total{action="updateecostate",result="ok"} 1' in r.text
    assert 'tokens_released_total{denom="utree"} 100' in r.text


def test_out_of_range_ecostate_is_422(instantiated_client):
    r = _execute(instantiated_client, ORACLE, {"updateecostate": {"ecostate": 2**63}})
    assert r.status_code == 422, r.text


def test_out_of_range_budget_is_422(client):
    r = client.post(
        "/v1/contract/instantiate",
        json=init_payload(total_tokens=2**64),
        headers=invocation_headers(OWNER),
    )
    assert r.status_code == 422, r.text
