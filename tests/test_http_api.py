"""
Integration tests for the wallet HTTP API

Drives the FastAPI app in-process through httpx with the ledger dependency
pointed at the per-test SQLite database.
"""

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import text

from transactions_service.core.config import get_settings
from transactions_service.core.security import create_access_token
from transactions_service.interfaces.http.deps import get_ledger_service
from transactions_service.main import create_app
from transactions_service.modules.wallets import MAX_AMOUNT, LedgerService
from transactions_service.schemas import TokenPayload

OWNER = 1
OTHER_OWNER = 2


def auth(owner_id, role="user"):
    token = create_access_token(TokenPayload(id=owner_id, username=f"user{owner_id}", role=role))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app(ledger):
    app = create_app()
    app.dependency_overrides[get_ledger_service] = lambda: ledger
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestAuthorization:
    @pytest.mark.asyncio
    async def test_missing_token_is_forbidden(self, client):
        r = await client.get("/wallets")
        assert r.status_code == 403

    @pytest.mark.asyncio
    async def test_garbage_token_is_forbidden(self, client):
        r = await client.get("/wallets", headers={"Authorization": "Bearer nope"})
        assert r.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_listing_requires_admin_role(self, client):
        r = await client.get("/list_wallets", headers=auth(OWNER))
        assert r.status_code == 403

    @pytest.mark.asyncio
    async def test_health_is_public(self, client):
        r = await client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestWalletFlow:
    @pytest.mark.asyncio
    async def test_create_replenish_transfer_and_list(self, client):
        w1 = (await client.post("/wallet", headers=auth(OWNER))).json()
        w2 = (await client.post("/wallet", headers=auth(OWNER))).json()
        assert w1["balance"] == 0 and w1["owner"] == OWNER

        r = await client.post("/replenish", json={"wallet_id": w1["code"], "amount": 1000}, headers=auth(OWNER))
        assert r.status_code == 200
        assert r.json()["balance"] == 1000

        r = await client.post(
            "/transfer",
            json={"from_wallet_id": w1["code"], "to_wallet_id": w2["code"], "amount": 400},
            headers=auth(OWNER),
        )
        assert r.status_code == 200
        assert r.json()["amount"] == 400
        assert r.json()["to_wallet_code"] == w2["code"]

        r = await client.get("/wallets", headers=auth(OWNER))
        body = r.json()
        assert body["total"] == 2
        by_code = {w["code"]: w for w in body["wallets"]}
        assert by_code[w1["code"]]["balance"] == 600
        assert by_code[w2["code"]]["balance"] == 400
        assert [t["amount"] for t in by_code[w1["code"]]["transfers"]] == [400]

        r = await client.get(f"/wallets/{w2['code']}", headers=auth(OWNER))
        assert r.status_code == 200
        assert r.json()["balance"] == 400

    @pytest.mark.asyncio
    async def test_admin_sees_every_wallet(self, client):
        await client.post("/wallet", headers=auth(OWNER))
        await client.post("/wallet", headers=auth(OTHER_OWNER))

        r = await client.get("/list_wallets", headers=auth(99, role=get_settings().security.admin_role))

        assert r.status_code == 200
        assert {w["owner"] for w in r.json()["wallets"]} == {OWNER, OTHER_OWNER}


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_invalid_amount_is_bad_request(self, client):
        wallet = (await client.post("/wallet", headers=auth(OWNER))).json()
        r = await client.post("/replenish", json={"wallet_id": wallet["code"], "amount": 0}, headers=auth(OWNER))
        assert r.status_code == 400

    @pytest.mark.asyncio
    async def test_foreign_wallet_is_not_found(self, client):
        wallet = (await client.post("/wallet", headers=auth(OTHER_OWNER))).json()
        r = await client.post("/replenish", json={"wallet_id": wallet["code"], "amount": 5}, headers=auth(OWNER))
        assert r.status_code == 404
        r = await client.get(f"/wallets/{wallet['code']}", headers=auth(OWNER))
        assert r.status_code == 404

    @pytest.mark.asyncio
    async def test_insufficient_balance_is_conflict(self, client):
        w1 = (await client.post("/wallet", headers=auth(OWNER))).json()
        w2 = (await client.post("/wallet", headers=auth(OWNER))).json()
        r = await client.post(
            "/transfer",
            json={"from_wallet_id": w1["code"], "to_wallet_id": w2["code"], "amount": 1},
            headers=auth(OWNER),
        )
        assert r.status_code == 409
        assert r.json()["detail"] == "insufficient balance"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [True, "100", 5.0])
    async def test_non_integer_json_amount_is_rejected(self, client, amount):
        w1 = (await client.post("/wallet", headers=auth(OWNER))).json()
        w2 = (await client.post("/wallet", headers=auth(OWNER))).json()
        await client.post("/replenish", json={"wallet_id": w1["code"], "amount": 100}, headers=auth(OWNER))

        r = await client.post("/replenish", json={"wallet_id": w1["code"], "amount": amount}, headers=auth(OWNER))
        assert r.status_code == 422
        r = await client.post(
            "/transfer",
            json={"from_wallet_id": w1["code"], "to_wallet_id": w2["code"], "amount": amount},
            headers=auth(OWNER),
        )
        assert r.status_code == 422

        r = await client.get(f"/wallets/{w1['code']}", headers=auth(OWNER))
        assert r.json()["balance"] == 100
        assert r.json()["transfers"] == []

    @pytest.mark.asyncio
    async def test_amount_beyond_int64_is_bad_request(self, client):
        wallet = (await client.post("/wallet", headers=auth(OWNER))).json()
        r = await client.post(
            "/replenish", json={"wallet_id": wallet["code"], "amount": MAX_AMOUNT + 1}, headers=auth(OWNER)
        )
        assert r.status_code == 400
        r = await client.get(f"/wallets/{wallet['code']}", headers=auth(OWNER))
        assert r.json()["balance"] == 0

    @pytest.mark.asyncio
    async def test_exhausted_wallet_codes_are_service_unavailable(self, app, client, store, addressing):
        ledger = LedgerService(
            store=store,
            addressing=addressing,
            create_attempts=2,
            code_generator=lambda: "444444444444",
        )
        app.dependency_overrides[get_ledger_service] = lambda: ledger
        assert (await client.post("/wallet", headers=auth(OWNER))).status_code == 200

        r = await client.post("/wallet", headers=auth(OWNER))

        assert r.status_code == 503
        assert r.json()["detail"] == "wallet storage unavailable"

    @pytest.mark.asyncio
    async def test_store_failure_is_service_unavailable(self, client, engine):
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE transfers"))
            await conn.execute(text("DROP TABLE wallets"))

        r = await client.post("/wallet", headers=auth(OWNER))
        assert r.status_code == 503
        r = await client.get("/wallets", headers=auth(OWNER))
        assert r.status_code == 503
        assert r.json()["detail"] == "wallet storage unavailable"
