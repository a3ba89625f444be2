"""API tests for the custom field registry and its sync behaviour"""
from datetime import datetime

API = "/api/v1"


def _create_field(client, **overrides):
    payload = {
        "fieldId": "warranty",
        "header": "Warranty",
        "type": "date",
        "entityType": "PROPERTY",
    }
    payload.update(overrides)
    return client.post(f"{API}/custom-fields", json=payload)


def _property(client, property_id):
    response = client.get(f"{API}/properties/{property_id}")
    assert response.status_code == 200
    return response.json()


def test_create_returns_definition_and_sync_summary(client, create_property):
    create_property()
    create_property()

    response = _create_field(client, fieldId="parking", header="Parking", type="boolean")

    assert response.status_code == 201
    body = response.json()
    assert body["fieldId"] == "parking"
    assert body["header"] == "Parking"
    assert body["type"] == "boolean"
    assert body["entityType"] == "PROPERTY"
    assert body["order"] == 0
    assert "createdAt" in body and "updatedAt" in body
    assert body["sync"] == {
        "fieldId": "parking",
        "entityType": "PROPERTY",
        "action": "seed",
        "applied": 2,
        "skipped": 0,
        "failedIds": [],
        "partial": False,
    }


def test_boolean_field_seeds_false_into_every_property(client, create_property):
    ids = [create_property()["id"] for _ in range(3)]

    response = _create_field(client, fieldId="thatField", header="That", type="boolean")
    assert response.status_code == 201

    for property_id in ids:
        assert _property(client, property_id)["customFields"]["thatField"] is False


def test_seed_defaults_by_type(client, create_property):
    prop = create_property()
    expected = {"text": "", "number": 0, "select": "option1", "boolean": False}

    for field_type in expected:
        response = _create_field(client, fieldId=f"f_{field_type}", header=field_type, type=field_type)
        assert response.status_code == 201

    bag = _property(client, prop["id"])["customFields"]
    for field_type, value in expected.items():
        assert bag[f"f_{field_type}"] == value


def test_property_field_does_not_touch_tenants(client, create_tenant):
    tenant = create_tenant()

    _create_field(client, fieldId="floor", header="Floor", type="number")

    response = client.get(f"{API}/tenants/{tenant['id']}")
    assert response.json()["customFields"] == {}


def test_tenant_field_seeds_tenants(client, create_tenant):
    tenant = create_tenant()

    response = _create_field(client, fieldId="passport", header="Passport", type="text", entityType="TENANT")
    assert response.status_code == 201

    response = client.get(f"{API}/tenants/{tenant['id']}")
    assert response.json()["customFields"] == {"passport": ""}


def test_duplicate_field_id_rejected_across_entity_types(client):
    assert _create_field(client).status_code == 201

    response = _create_field(client, entityType="TENANT", type="text")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_FIELD"
    fields = client.get(f"{API}/custom-fields").json()
    assert [f["fieldId"] for f in fields] == ["warranty"]


def test_create_validation_errors(client):
    cases = [
        {"fieldId": ""},
        {"fieldId": "x" * 51},
        {"header": ""},
        {"header": "h" * 101},
        {"type": "color"},
        {"entityType": "BUILDING"},
        {"order": -1},
    ]
    for overrides in cases:
        response = _create_field(client, **overrides)
        assert response.status_code == 400, overrides
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    assert client.get(f"{API}/custom-fields").json() == []


def test_field_id_at_max_length_is_accepted(client):
    assert _create_field(client, fieldId="x" * 50, header="h" * 100).status_code == 201


def test_order_defaults_to_count_per_entity_type(client):
    _create_field(client, fieldId="a", type="text")
    _create_field(client, fieldId="b", type="text")
    tenant_field = _create_field(client, fieldId="c", type="text", entityType="TENANT").json()
    explicit = _create_field(client, fieldId="d", type="text", order=7).json()

    fields = {f["fieldId"]: f for f in client.get(f"{API}/custom-fields").json()}
    assert fields["a"]["order"] == 0
    assert fields["b"]["order"] == 1
    assert tenant_field["order"] == 0
    assert explicit["order"] == 7


def test_list_ordering_and_filter(client):
    _create_field(client, fieldId="t1", type="text", entityType="TENANT")
    _create_field(client, fieldId="p_late", type="text", order=5)
    _create_field(client, fieldId="p_early", type="text", order=1)

    all_fields = client.get(f"{API}/custom-fields").json()
    assert [f["fieldId"] for f in all_fields] == ["p_early", "p_late", "t1"]

    tenants = client.get(f"{API}/custom-fields", params={"entityType": "TENANT"}).json()
    assert [f["fieldId"] for f in tenants] == ["t1"]


def test_list_rejects_unknown_entity_type(client):
    response = client.get(f"{API}/custom-fields", params={"entityType": "BUILDING"})
    assert response.status_code == 400


def test_get_single_field(client):
    created = _create_field(client).json()

    assert client.get(f"{API}/custom-fields/{created['id']}").json()["fieldId"] == "warranty"
    assert client.get(f"{API}/custom-fields/9999").status_code == 404


def test_update_header_type_and_order(client):
    created = _create_field(client).json()

    response = client.put(
        f"{API}/custom-fields/{created['id']}",
        json={"header": "Warranty until", "type": "text", "order": 3},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["header"] == "Warranty until"
    assert body["type"] == "text"
    assert body["order"] == 3
    assert body["fieldId"] == "warranty"
    assert body["entityType"] == "PROPERTY"


def test_update_rejects_immutable_attributes(client):
    created = _create_field(client).json()

    for payload in ({"fieldId": "other"}, {"entityType": "TENANT"}, {"header": None}):
        response = client.put(f"{API}/custom-fields/{created['id']}", json=payload)
        assert response.status_code == 400, payload

    assert client.get(f"{API}/custom-fields/{created['id']}").json()["fieldId"] == "warranty"


def test_update_unknown_field_is_404(client):
    response = client.put(f"{API}/custom-fields/424242", json={"header": "X"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_delete_unknown_field_is_404(client):
    assert client.delete(f"{API}/custom-fields/424242").status_code == 404


def test_delete_without_cleanup_keeps_entity_data(client, create_property):
    ids = [create_property()["id"] for _ in range(2)]
    created = _create_field(client, fieldId="floor", type="number").json()
    before = [_property(client, i)["customFields"] for i in ids]

    response = client.delete(f"{API}/custom-fields/{created['id']}", params={"cleanupData": "false"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "cleanup": None}
    assert [_property(client, i)["customFields"] for i in ids] == before
    assert client.get(f"{API}/custom-fields").json() == []


def test_delete_with_cleanup_removes_key_everywhere(client, create_property):
    ids = [create_property()["id"] for _ in range(3)]
    created = _create_field(client, fieldId="floor", type="number").json()
    client.patch(f"{API}/properties/{ids[0]}", json={"other": "keep me"})

    response = client.delete(f"{API}/custom-fields/{created['id']}", params={"cleanupData": "true"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["cleanup"]["applied"] == 3
    assert body["cleanup"]["partial"] is False
    for property_id in ids:
        assert "floor" not in _property(client, property_id)["customFields"]
    assert _property(client, ids[0])["customFields"] == {"other": "keep me"}


def test_cleanup_skips_entities_without_key(client, create_property):
    create_property()
    created = _create_field(client, fieldId="floor", type="number").json()
    late = create_property()

    body = client.delete(f"{API}/custom-fields/{created['id']}", params={"cleanupData": "true"}).json()

    assert body["cleanup"]["applied"] == 1
    assert body["cleanup"]["skipped"] == 1
    assert _property(client, late["id"])["customFields"] == {}


def test_sync_endpoint_backfills_new_entities_only(client, create_property):
    first = create_property()
    created = _create_field(client, fieldId="notes", type="text").json()
    client.patch(f"{API}/properties/{first['id']}", json={"notes": "boiler replaced"})
    late = create_property()

    response = client.post(f"{API}/custom-fields/{created['id']}/sync")

    assert response.status_code == 200
    assert response.json()["applied"] == 1
    assert response.json()["skipped"] == 1
    assert _property(client, first["id"])["customFields"]["notes"] == "boiler replaced"
    assert _property(client, late["id"])["customFields"]["notes"] == ""


def test_warranty_lifecycle(client, create_property):
    ids = [create_property()["id"] for _ in range(3)]

    created = _create_field(client).json()
    seeded = [_property(client, i)["customFields"]["warranty"] for i in ids]
    assert len(set(seeded)) == 1
    assert isinstance(datetime.fromisoformat(seeded[0]), datetime)

    response = client.patch(f"{API}/properties/{ids[1]}", json={"warranty": "2030-01-01"})
    assert response.json()["customFields"]["warranty"] == "2030-01-01"

    response = client.delete(f"{API}/custom-fields/{created['id']}", params={"cleanupData": "true"})
    assert response.status_code == 200

    for property_id in ids:
        assert "warranty" not in _property(client, property_id)["customFields"]
    assert client.get(f"{API}/custom-fields").json() == []
