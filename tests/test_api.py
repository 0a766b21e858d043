from decimal import Decimal

D = Decimal


async def add_expense(client, group_id, paid_by, amount, splits, **extra):
    payload = {
        "group_id": group_id,
        "paid_by": paid_by,
        "amount": str(amount),
        "description": extra.pop("description", "Dinner"),
        "splits": splits,
        **extra,
    }
    return await client.post("/api/v1/expenses/", json=payload)


def net_of(body):
    return {pid: D(amount) for pid, amount in body["net"].items()}


async def test_root_and_health(client):
    resp = await client.get("/")
    assert resp.status_code == 200

    resp = await client.get("/api/v1/system/health")
    assert resp.json()["status"] == "healthy"


async def test_categories(client):
    resp = await client.get("/api/v1/expenses/categories")
    ids = [c["id"] for c in resp.json()]
    assert ids == ["food", "travel", "utilities", "entertainment", "settle", "other"]


async def test_duplicate_email_rejected(client, make_person):
    await make_person("Alice", "alice@example.com")
    resp = await client.post("/api/v1/persons/", json={"name": "Al", "email": "ALICE@example.com"})
    assert resp.status_code == 409


async def test_group_members_keep_join_order(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    c = await make_person("Carol")
    gid = await make_group("Trip", [a, b])

    resp = await client.post(f"/api/v1/groups/{gid}/members", json={"member_ids": [b, c]})
    assert resp.status_code == 200
    assert resp.json()["member_ids"] == [a, b, c]

    resp = await client.get(f"/api/v1/groups/{gid}/members")
    assert [p["name"] for p in resp.json()] == ["Alice", "Bob", "Carol"]


async def test_group_with_unknown_member(client, make_person):
    a = await make_person("Alice")
    resp = await client.post("/api/v1/groups/", json={"name": "Trip", "member_ids": [a, "nobody"]})
    assert resp.status_code == 404


async def test_equal_split_then_settle_up(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    c = await make_person("Carol")
    gid = await make_group("Trip", [a, b, c])

    resp = await add_expense(
        client, gid, a, 30,
        [{"member_id": a}, {"member_id": b}, {"member_id": c}],
        split_method="equal", category_id="food",
    )
    assert resp.status_code == 201, resp.text
    assert [D(s["amount"]) for s in resp.json()["splits"]] == [D("10"), D("10"), D("10")]

    resp = await client.get(f"/api/v1/groups/{gid}/balances")
    body = resp.json()
    assert net_of(body) == {a: D("20"), b: D("-10"), c: D("-10")}
    assert [(s["from_id"], s["to_id"], D(s["amount"])) for s in body["settlements"]] == [
        (b, a, D("10")),
        (c, a, D("10")),
    ]
    assert body["settlements"][0]["from_name"] == "Bob"

    resp = await client.post(f"/api/v1/groups/{gid}/settle-up")
    assert resp.status_code == 200
    created = resp.json()
    assert len(created) == 2
    assert {e["category_id"] for e in created} == {"settle"}
    assert created[0]["description"] == "Settle up: Bob paid Alice"
    assert created[0]["paid_by"] == b
    assert created[0]["splits"] == [{"member_id": a, "amount": created[0]["amount"]}]

    resp = await client.get(f"/api/v1/groups/{gid}/balances")
    body = resp.json()
    assert all(v == 0 for v in net_of(body).values())
    assert body["settlements"] == []

    resp = await client.post(f"/api/v1/groups/{gid}/settle-up")
    assert resp.json() == []


async def test_expenses_cancel_out(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    gid = await make_group("Flat", [a, b])

    splits = [{"member_id": a, "amount": "25"}, {"member_id": b, "amount": "25"}]
    assert (await add_expense(client, gid, a, 50, splits)).status_code == 201
    assert (await add_expense(client, gid, b, 50, splits)).status_code == 201

    body = (await client.get(f"/api/v1/groups/{gid}/balances")).json()
    assert net_of(body) == {a: D("0"), b: D("0")}
    assert body["settlements"] == []


async def test_percentage_split(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    gid = await make_group("Flat", [a, b])

    resp = await add_expense(
        client, gid, a, 80,
        [{"member_id": a, "percentage": "75"}, {"member_id": b, "percentage": "25"}],
        split_method="percentage", category_id="utilities",
    )
    assert resp.status_code == 201, resp.text

    body = (await client.get(f"/api/v1/groups/{gid}/balances")).json()
    assert net_of(body) == {a: D("20"), b: D("-20")}


async def test_percentage_must_total_100(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    gid = await make_group("Flat", [a, b])

    resp = await add_expense(
        client, gid, a, 80,
        [{"member_id": a, "percentage": "70"}, {"member_id": b, "percentage": "20"}],
        split_method="percentage",
    )
    assert resp.status_code == 400


async def test_expense_validation(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    outsider = await make_person("Eve")
    gid = await make_group("Flat", [a, b])
    splits = [{"member_id": a, "amount": "5"}, {"member_id": b, "amount": "5"}]

    assert (await add_expense(client, gid, a, 10, splits, category_id="settle")).status_code == 400
    assert (await add_expense(client, gid, a, 10, splits, category_id="nope")).status_code == 400
    assert (await add_expense(client, gid, a, 11, splits)).status_code == 400
    assert (await add_expense(client, gid, a, 0, splits)).status_code == 400
    assert (await add_expense(client, gid, outsider, 10, splits)).status_code == 400
    assert (await add_expense(client, gid, a, 10, [{"member_id": outsider, "amount": "10"}])).status_code == 400
    assert (await add_expense(client, gid, a, 10, [splits[0], splits[0]])).status_code == 400
    assert (await add_expense(client, gid, a, 10, [])).status_code == 400
    assert (await add_expense(client, "missing", a, 10, splits)).status_code == 404


async def test_deleted_expense_leaves_balances(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    gid = await make_group("Flat", [a, b])

    resp = await add_expense(client, gid, a, 10, [{"member_id": b, "amount": "10"}])
    expense_id = resp.json()["id"]

    assert (await client.get(f"/api/v1/expenses/{expense_id}")).status_code == 200
    assert (await client.delete(f"/api/v1/expenses/{expense_id}")).json() == {"status": "deleted"}
    assert (await client.get(f"/api/v1/expenses/{expense_id}")).status_code == 404

    body = (await client.get(f"/api/v1/groups/{gid}/balances")).json()
    assert body["settlements"] == []


async def test_category_filter(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    gid = await make_group("Trip", [a, b])
    splits = [{"member_id": b, "amount": "10"}]

    await add_expense(client, gid, a, 10, splits, category_id="food")
    await add_expense(client, gid, a, 10, splits, category_id="travel")

    resp = await client.get(f"/api/v1/groups/{gid}/expenses", params={"category": "travel"})
    assert [e["category_id"] for e in resp.json()] == ["travel"]

    resp = await client.get(f"/api/v1/groups/{gid}/expenses")
    assert len(resp.json()) == 2


async def test_manual_settlement(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    gid = await make_group("Flat", [a, b])

    await add_expense(client, gid, a, 40, [{"member_id": b, "amount": "40"}])

    resp = await client.post(f"/api/v1/groups/{gid}/settlements", json={"from_id": b, "to_id": a, "amount": "15"})
    assert resp.status_code == 201
    assert resp.json()["category_id"] == "settle"

    body = (await client.get(f"/api/v1/groups/{gid}/balances")).json()
    assert net_of(body) == {a: D("25"), b: D("-25")}

    resp = await client.post(f"/api/v1/groups/{gid}/settlements", json={"from_id": a, "to_id": a, "amount": "5"})
    assert resp.status_code == 400


async def test_overall_dashboard(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    c = await make_person("Carol")
    g1 = await make_group("Trip", [a, b])
    g2 = await make_group("Flat", [b, c])

    await add_expense(client, g1, a, 20, [{"member_id": a, "amount": "10"}, {"member_id": b, "amount": "10"}])
    await add_expense(client, g2, c, 30, [{"member_id": b, "amount": "30"}])

    body = (await client.get("/api/v1/balances/overall")).json()
    assert net_of(body) == {a: D("10"), b: D("-40"), c: D("30")}
    assert D(body["total_owed"]) == D("40")
    assert D(body["total_debt"]) == D("-40")
    assert D(body["total_expenses"]) == D("50")
    assert [(s["from_id"], s["to_id"], D(s["amount"])) for s in body["settlements"]] == [
        (b, c, D("30")),
        (b, a, D("10")),
    ]

    body = (await client.get(f"/api/v1/balances/person/{b}")).json()
    assert D(body["net_balance"]) == D("-40")


async def test_person_with_expenses_cannot_be_deleted(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    idle = await make_person("Idle")
    gid = await make_group("Flat", [a, b, idle])

    await add_expense(client, gid, a, 10, [{"member_id": b, "amount": "10"}])

    assert (await client.delete(f"/api/v1/persons/{b}")).status_code == 409
    assert (await client.delete(f"/api/v1/persons/{idle}")).status_code == 200
    assert (await client.get(f"/api/v1/persons/{idle}")).status_code == 404
    assert (await client.get(f"/api/v1/groups/{gid}")).json()["member_ids"] == [a, b]


async def test_sub_cent_amounts_rejected(client, make_person, make_group):
    members = [await make_person(f"P{i}") for i in range(6)]
    gid = await make_group("Party", members)

    resp = await add_expense(
        client, gid, members[0], "6.03",
        [{"member_id": m, "amount": "1.005"} for m in members],
    )
    assert resp.status_code == 422

    resp = await add_expense(client, gid, members[0], "6.031", [{"member_id": members[1], "amount": "6.031"}])
    assert resp.status_code == 422

    resp = await client.post(
        f"/api/v1/groups/{gid}/settlements",
        json={"from_id": members[1], "to_id": members[0], "amount": "0.125"},
    )
    assert resp.status_code == 422

    body = (await client.get(f"/api/v1/groups/{gid}/balances")).json()
    assert sum(net_of(body).values()) == 0
    assert body["settlements"] == []


async def test_uneven_equal_split_still_balances(client, make_person, make_group):
    members = [await make_person(f"P{i}") for i in range(6)]
    gid = await make_group("Party", members)

    resp = await add_expense(client, gid, members[0], "6.03", [{"member_id": m} for m in members], split_method="equal")
    assert resp.status_code == 201

    body = (await client.get(f"/api/v1/groups/{gid}/balances")).json()
    assert sum(net_of(body).values()) == 0

    await client.post(f"/api/v1/groups/{gid}/settle-up")
    body = (await client.get(f"/api/v1/groups/{gid}/balances")).json()
    assert all(v == 0 for v in net_of(body).values())


async def test_expense_reports_category_name(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    gid = await make_group("Trip", [a, b])

    resp = await add_expense(client, gid, a, 10, [{"member_id": b, "amount": "10"}], category_id="food")
    assert resp.json()["category_name"] == "Food & Dining"

    resp = await client.post(f"/api/v1/groups/{gid}/settle-up")
    assert resp.json()[0]["category_name"] == "Settle Up"


async def test_settlement_with_non_member(client, make_person, make_group):
    a = await make_person("Alice")
    b = await make_person("Bob")
    outsider = await make_person("Eve")
    gid = await make_group("Flat", [a, b])

    resp = await client.post(f"/api/v1/groups/{gid}/settlements", json={"from_id": outsider, "to_id": a, "amount": "5"})
    assert resp.status_code == 403

    resp = await client.post(f"/api/v1/groups/{gid}/settlements", json={"from_id": a, "to_id": outsider, "amount": "5"})
    assert resp.status_code == 403

    resp = await client.post("/api/v1/groups/missing/settlements", json={"from_id": a, "to_id": b, "amount": "5"})
    assert resp.status_code == 404


async def test_unknown_person_balance(client):
    resp = await client.get("/api/v1/balances/person/nobody")
    assert resp.status_code == 404
