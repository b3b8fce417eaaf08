from __future__ import annotations

from app.models import UserRole

DRAFT = {"final_contract_html": "<p>Buyer: Asha Rao. Price is final.</p>", "summary": "EV sale"}


def test_health_reports_service(api):
    response = api.client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_register_login_and_profile(api):
    register = api.client.post(
        "/api/v1/auth/register",
        json={"name": "Ravi", "email": "ravi@example.com", "password": "secret123", "role": "seller", "dealership_name": "Rao Motors"},
    )
    assert register.status_code == 201
    assert register.json()["user"]["role"] == "seller"

    duplicate = api.client.post(
        "/api/v1/auth/register",
        json={"name": "Ravi", "email": "ravi@example.com", "password": "secret123", "role": "buyer"},
    )
    assert duplicate.status_code == 409

    login = api.client.post("/api/v1/auth/login", json={"email": "ravi@example.com", "password": "secret123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    me = api.client.patch("/api/v1/auth/me", headers=headers, json={"designation": "Owner"})
    assert me.status_code == 200
    assert me.json()["designation"] == "Owner"

    refreshed = api.client.post("/api/v1/auth/refresh", json={"refresh_token": login.json()["refresh_token"]})
    assert refreshed.status_code == 200


def test_registration_rejected_by_risk_check(api):
    api.llm.responses["account.validate"] = {"is_valid": False, "reasons": ["Disposable email"], "risk_score": 0.95}
    response = api.client.post(
        "/api/v1/auth/register",
        json={"name": "Spam", "email": "spam@example.com", "password": "secret123", "role": "buyer"},
    )
    assert response.status_code == 400
    assert response.json()["detail"]["reasons"] == ["Disposable email"]


def test_requests_without_token_are_unauthorized(api):
    assert api.client.get("/api/v1/vehicles").status_code == 401
    assert api.client.post("/api/v1/match", json={}).status_code == 401


def test_catalog_served_before_seeding_and_seed_is_admin_only(api):
    _, buyer_headers = api.user(UserRole.BUYER)
    _, admin_headers = api.user(UserRole.ADMIN)

    vehicles = api.client.get("/api/v1/vehicles", headers=buyer_headers)
    assert vehicles.status_code == 200
    assert len(vehicles.json()) == 10
    assert vehicles.json()[0]["price_range"] == [3600000, 4200000]

    assert api.client.post("/api/v1/vehicles/seed", headers=buyer_headers).status_code == 403
    seeded = api.client.post("/api/v1/vehicles/seed", headers=admin_headers)
    assert seeded.status_code == 200


def test_match_falls_back_to_default_intent(api):
    _, headers = api.user(UserRole.BUYER)
    response = api.client.post(
        "/api/v1/match",
        headers=headers,
        json={"people": "just me", "terrain": "city roads", "primary_use": "daily commute", "budget": "15 lakh"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["intent"]["category"] == "City Commute"
    assert body["vehicles"]
    assert body["vehicles"][0]["vehicle"]["id"] in {"v2", "v7"}


def test_contract_negotiation_and_signing_flow(api):
    api.llm.responses["contract.build"] = DRAFT
    buyer, buyer_headers = api.user(UserRole.BUYER, name="Asha Rao")
    _, seller_headers = api.user(UserRole.SELLER, dealership_name="Rao Motors")

    fields = api.client.get("/api/v1/contracts/fields/v2", headers=buyer_headers)
    assert fields.status_code == 200
    assert fields.json()["prefill"]["Full Legal Name"] == "Asha Rao"

    drafted = api.client.post(
        "/api/v1/contracts",
        headers=buyer_headers,
        json={"vehicle_id": "v2", "buyer_inputs": {"Full Legal Name": "Asha Rao"}},
    )
    assert drafted.status_code == 201
    contract = drafted.json()
    assert contract["status"] == "pending"

    changed = api.client.post(
        f"/api/v1/contracts/{contract['id']}/changes",
        headers=buyer_headers,
        json={"message": "Include floor mats", "expected_revision": contract["revision"]},
    )
    assert changed.status_code == 200
    assert changed.json()["status"] == "needs_changes"

    inbox = api.client.get("/api/v1/queries", headers=seller_headers)
    assert inbox.status_code == 200
    assert inbox.json()[0]["message"].endswith("Include floor mats")

    api.llm.responses["contract.compliance"] = {"satisfied": False, "reason": "Floor mats missing"}
    warned = api.client.post(
        f"/api/v1/contracts/{contract['id']}/revision",
        headers=seller_headers,
        json={"revised_html": "<p>Same terms</p>"},
    )
    assert warned.status_code == 409
    assert warned.json()["detail"] == {
        "code": "compliance_warning",
        "reason": "Floor mats missing",
        "confirm_required": True,
    }

    revised = api.client.post(
        f"/api/v1/contracts/{contract['id']}/revision",
        headers=seller_headers,
        json={"revised_html": "<p>Same terms</p>", "confirm": True},
    )
    assert revised.status_code == 200
    assert revised.json()["status"] == "pending"
    assert revised.json()["change_request_message"] == ""

    stale = api.client.post(
        f"/api/v1/contracts/{contract['id']}/sign",
        headers=buyer_headers,
        json={"expected_revision": changed.json()["revision"]},
    )
    assert stale.status_code == 409

    signed = api.client.post(f"/api/v1/contracts/{contract['id']}/sign", headers=buyer_headers, json={})
    assert signed.status_code == 200
    assert signed.json()["status"] == "accepted"
    assert signed.json()["signature_receipt"]["tx_hash"].startswith("0x")

    again = api.client.post(f"/api/v1/contracts/{contract['id']}/sign", headers=buyer_headers, json={})
    assert again.status_code == 409

    activity = api.client.get("/api/v1/activity", headers=buyer_headers)
    assert activity.status_code == 200
    assert [c["id"] for c in activity.json()["contracts"]] == [contract["id"]]

    dashboard = api.client.get("/api/v1/analytics/dashboard", headers=seller_headers)
    assert dashboard.status_code == 200
    assert dashboard.json()["revenue"] == 2250000


def test_other_buyer_cannot_read_or_sign_contract(api):
    api.llm.responses["contract.build"] = DRAFT
    _, owner_headers = api.user(UserRole.BUYER)
    _, other_headers = api.user(UserRole.BUYER)
    contract = api.client.post("/api/v1/contracts", headers=owner_headers, json={"vehicle_id": "v7"}).json()

    assert api.client.get(f"/api/v1/contracts/{contract['id']}", headers=other_headers).status_code == 403
    assert api.client.post(f"/api/v1/contracts/{contract['id']}/sign", headers=other_headers, json={}).status_code == 403
    assert api.client.post("/api/v1/contracts/missing/sign", headers=owner_headers, json={}).status_code == 404


def test_contract_assistant_drops_unverifiable_citation(api):
    api.llm.responses["contract.build"] = DRAFT
    api.llm.responses["contract.assistant"] = {"answer": "Yes.", "citation_quote": "Price is negotiable"}
    _, headers = api.user(UserRole.BUYER)
    contract = api.client.post("/api/v1/contracts", headers=headers, json={"vehicle_id": "v2"}).json()

    answer = api.client.post(
        f"/api/v1/contracts/{contract['id']}/assistant", headers=headers, json={"question": "Is price final?"}
    )
    assert answer.status_code == 200
    assert answer.json() == {"answer": "Yes.", "citation_quote": ""}


def test_seller_vehicle_and_insurance_management(api):
    seller, seller_headers = api.user(UserRole.SELLER, dealership_name="Rao Motors")
    _, other_headers = api.user(UserRole.SELLER, dealership_name="Other Cars")
    _, buyer_headers = api.user(UserRole.BUYER)

    created = api.client.post(
        "/api/v1/vehicles",
        headers=seller_headers,
        json={"name": "Rover", "price": 1000000, "drive": "AWD", "seats": 5},
    )
    assert created.status_code == 201
    vehicle = created.json()
    assert vehicle["seller_id"] == seller.id
    assert vehicle["price_range"] == [1000000, 1100000]

    assert api.client.post("/api/v1/vehicles", headers=buyer_headers, json={"name": "X", "price": 1}).status_code == 403
    assert (
        api.client.patch(f"/api/v1/vehicles/{vehicle['id']}", headers=other_headers, json={"seats": 7}).status_code
        == 403
    )

    plan = api.client.post(
        f"/api/v1/vehicles/{vehicle['id']}/insurance",
        headers=seller_headers,
        json={"provider": "Digit", "name": "Basic", "premium": 9000},
    )
    assert plan.status_code == 201
    plan_id = plan.json()["insurance_options"][0]["id"]

    api.llm.responses["insurance.recommend"] = {"recommendedPlanId": "unknown", "reason": "x"}
    recommended = api.client.post(f"/api/v1/vehicles/{vehicle['id']}/insurance/recommend", headers=buyer_headers, json={})
    assert recommended.status_code == 200
    assert recommended.json()["recommended_plan_id"] == plan_id

    forwarded = api.client.post(
        f"/api/v1/vehicles/{vehicle['id']}/insurance/forward",
        headers=buyer_headers,
        json={"question": "Does it cover floods?"},
    )
    assert forwarded.status_code == 201
    assert forwarded.json()["seller_id"] == seller.id

    inbox = api.client.get("/api/v1/queries", headers=seller_headers).json()
    replied = api.client.post(
        f"/api/v1/queries/{inbox[0]['id']}/reply", headers=seller_headers, json={"reply": "Yes, with add-on."}
    )
    assert replied.status_code == 200
    assert replied.json()["status"] == "closed"
    assert (
        api.client.post(f"/api/v1/queries/{inbox[0]['id']}/reply", headers=other_headers, json={"reply": "Me too"}).status_code
        == 403
    )

    removed = api.client.delete(f"/api/v1/vehicles/{vehicle['id']}/insurance/{plan_id}", headers=seller_headers)
    assert removed.status_code == 200
    assert removed.json()["insurance_options"] == []


def test_visualizer_generate_and_save(api):
    api.llm.image = "data:image/png;base64,AAA"
    _, headers = api.user(UserRole.BUYER)

    generated = api.client.post(
        "/api/v1/visuals/generate", headers=headers, json={"vehicle_id": "v1", "context": "snowy mountain pass"}
    )
    assert generated.status_code == 200
    assert generated.json()["images"] == ["data:image/png;base64,AAA"] * 4

    saved = api.client.post(
        "/api/v1/visuals", headers=headers, json={"vehicle_id": "v1", "image_url": "data:image/png;base64,AAA"}
    )
    assert saved.status_code == 201
    assert saved.json()["prompt"] == "Standard View"

    listed = api.client.get("/api/v1/visuals", headers=headers)
    assert [v["id"] for v in listed.json()] == [saved.json()["id"]]
    assert api.client.delete(f"/api/v1/visuals/{saved.json()['id']}", headers=headers).status_code == 204


def test_unknown_vehicle_is_not_found(api):
    _, headers = api.user(UserRole.BUYER)
    assert api.client.get("/api/v1/vehicles/v404", headers=headers).status_code == 404
    response = api.client.post("/api/v1/contracts", headers=headers, json={"vehicle_id": "v404"})
    assert response.status_code == 404


def test_seller_template_tools(api):
    _, headers = api.user(UserRole.SELLER, dealership_name="Rao Motors")
    api.llm.responses["contract.seller_template"] = "```html\n<h3>SALE</h3><p>Price: [Final Price]</p>\n```"
    api.llm.responses["contract.seller_placeholders"] = {"seller_fields": ["Final Price", "VIN"]}

    generated = api.client.post("/api/v1/vehicles/v7/template", headers=headers, json={"region": "Karnataka"})
    assert generated.status_code == 200
    template = generated.json()["template"]
    assert template == "<h3>SALE</h3><p>Price: [Final Price]</p>"

    placeholders = api.client.post(
        "/api/v1/vehicles/v7/template/placeholders", headers=headers, json={"template": template}
    )
    assert placeholders.status_code == 200
    assert placeholders.json() == {"seller_fields": ["Final Price", "VIN"], "prefill": {"Final Price": "1200000"}}

    refined = api.client.post(
        "/api/v1/vehicles/template/refine", headers=headers, json={"text": template, "instruction": "Add a warranty clause"}
    )
    assert refined.status_code == 200
    assert refined.json()["template"] == template
