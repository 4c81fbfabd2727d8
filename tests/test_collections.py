"""Collection API tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from factories import workflow_payload
from workflow_catalog.models import CollectionWorkflow


async def _create_template(client, name, **kwargs):
    resp = await client.put("/templates/workflows", json=workflow_payload(name, **kwargs))
    return resp.json()["id"]


@pytest.mark.asyncio
async def test_list_collections_empty(client: AsyncClient):
    resp = await client.get("/templates/collections")
    assert resp.status_code == 200
    assert resp.json() == {"collections": []}


@pytest.mark.asyncio
async def test_create_collection(client: AsyncClient):
    t1 = await _create_template(client, "One")
    payload = {
        "name": "Starter pack",
        "createdAt": "2025-02-01",
        "rank": 3,
        "workflows": [{"id": t1}, {"id": 0}, {"name": "no id"}],
    }
    resp = await client.put("/templates/collections", json=payload)
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"] > 0
    assert data["name"] == "Starter pack"
    assert data["rank"] == 3
    assert data["totalViews"] is None
    assert data["workflows"] == payload["workflows"]
    assert data["nodes"] == []
    assert data["message"] == "Collection created successfully"

    listing = (await client.get("/templates/collections")).json()["collections"]
    assert listing == [
        {
            "id": data["id"],
            "rank": 3,
            "name": "Starter pack",
            "totalViews": None,
            "createdAt": "2025-02-01",
            "workflows": [{"id": t1}],
            "nodes": [],
        }
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"createdAt": "2025-02-01"},
        {"name": "", "createdAt": "2025-02-01"},
        {"name": "No date"},
    ],
)
async def test_create_collection_requires_name_and_date(client: AsyncClient, body):
    resp = await client.put("/templates/collections", json=body)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_list_orders_by_rank_then_name(client: AsyncClient):
    for name, rank in [("Zeta", 1), ("Alpha", 2), ("Beta", 1)]:
        await client.put("/templates/collections", json={"name": name, "rank": rank, "createdAt": "x"})

    names = [c["name"] for c in (await client.get("/templates/collections")).json()["collections"]]
    assert names == ["Beta", "Zeta", "Alpha"]


@pytest.mark.asyncio
async def test_list_filters(client: AsyncClient):
    await client.put(
        "/templates/collections",
        json={"name": "AI helpers", "createdAt": "x", "categories": [{"name": "AI"}]},
    )
    await client.put(
        "/templates/collections",
        json={"name": "Sales helpers", "createdAt": "x", "categories": [{"name": "Sales"}]},
    )
    await client.put("/templates/collections", json={"name": "AI untagged", "createdAt": "x"})

    categories = (await client.get("/templates/categories")).json()["categories"]
    ai_id = next(c["id"] for c in categories if c["name"] == "AI")
    sales_id = next(c["id"] for c in categories if c["name"] == "Sales")

    by_search = (await client.get("/templates/collections", params={"search": "AI"})).json()
    assert sorted(c["name"] for c in by_search["collections"]) == ["AI helpers", "AI untagged"]

    by_category = (await client.get("/templates/collections", params={"category[0]": ai_id})).json()
    assert [c["name"] for c in by_category["collections"]] == ["AI helpers"]

    both_categories = (
        await client.get(
            "/templates/collections", params={"category[0]": ai_id, "category[1]": sales_id}
        )
    ).json()
    assert len(both_categories["collections"]) == 2

    combined = (
        await client.get(
            "/templates/collections", params={"category[0]": sales_id, "search": "AI"}
        )
    ).json()
    assert combined["collections"] == []


@pytest.mark.asyncio
async def test_collection_detail(client: AsyncClient):
    t1 = await _create_template(client, "First", categories=[{"name": "Ops"}], nodes=[{"a": 1}])
    t2 = await _create_template(client, "Second")
    created = (
        await client.put(
            "/templates/collections",
            json={"name": "Bundle", "createdAt": "2025-03-01", "workflows": [{"id": t2}, {"id": t1}]},
        )
    ).json()

    resp = await client.get(f"/templates/collections/{created['id']}")
    assert resp.status_code == 200
    collection = resp.json()["collection"]
    assert collection["description"] == ""
    assert collection["totalViews"] == 0
    assert collection["nodes"] == []
    assert collection["image"] == []
    assert collection["categories"] == []

    members = collection["workflows"]
    assert [m["id"] for m in members] == [t1, t2]
    first = members[0]
    assert set(first) == {
        "id", "name", "views", "recentViews", "totalViews", "createdAt", "description",
        "workflow", "lastUpdatedBy", "workflowInfo", "user", "nodes", "categories", "image",
    }
    assert first["nodes"] == [{"a": 1}]
    assert [c["name"] for c in first["categories"]] == ["Ops"]
    assert members[1]["nodes"] == []
    assert members[1]["workflowInfo"] == {}


@pytest.mark.asyncio
async def test_collection_detail_missing(client: AsyncClient):
    resp = await client.get("/templates/collections/9999999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_add_workflow_twice(client: AsyncClient, db):
    template_id = await _create_template(client, "Member")
    collection_id = (
        await client.put("/templates/collections", json={"name": "Grow", "createdAt": "x"})
    ).json()["id"]
    body = {"collectionId": collection_id, "templateId": template_id}

    first = await client.patch("/templates/collections", json=body)
    assert first.status_code == 200
    assert first.json() == {
        "message": "Workflow added to collection successfully",
        "collectionId": collection_id,
        "templateId": template_id,
    }

    second = await client.patch("/templates/collections", json=body)
    assert second.status_code == 200
    assert second.json()["message"] == "Workflow already exists in collection"

    count = await db.scalar(
        select(func.count()).select_from(CollectionWorkflow).where(
            CollectionWorkflow.collection_id == collection_id,
            CollectionWorkflow.template_id == template_id,
        )
    )
    assert count == 1


@pytest.mark.asyncio
async def test_add_workflow_unknown_ids(client: AsyncClient):
    template_id = await _create_template(client, "Lonely")
    collection_id = (
        await client.put("/templates/collections", json={"name": "Grow", "createdAt": "x"})
    ).json()["id"]

    resp = await client.patch(
        "/templates/collections", json={"collectionId": 999, "templateId": template_id}
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Collection not found"

    resp = await client.patch(
        "/templates/collections", json={"collectionId": collection_id, "templateId": 999}
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Template not found"


@pytest.mark.asyncio
async def test_add_workflow_requires_integers(client: AsyncClient):
    resp = await client.patch("/templates/collections", json={"collectionId": "1", "templateId": 2})
    assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_id", ["99999999999999999999", "abc"])
async def test_unusable_collection_id_is_404(client: AsyncClient, raw_id):
    await client.put("/templates/collections", json={"name": "Grow", "createdAt": "x"})
    assert (await client.get(f"/templates/collections/{raw_id}")).status_code == 404


@pytest.mark.asyncio
async def test_out_of_range_category_filter_matches_nothing(client: AsyncClient):
    await client.put(
        "/templates/collections",
        json={"name": "Grow", "createdAt": "x", "categories": [{"name": "Sales"}]},
    )
    resp = await client.get(
        "/templates/collections", params={"category[0]": "99999999999999999999"}
    )
    assert resp.status_code == 200
    assert resp.json() == {"collections": []}


@pytest.mark.asyncio
async def test_create_collection_tolerates_odd_optional_fields(client: AsyncClient):
    payload = {
        "name": "Odd",
        "createdAt": "x",
        "rank": "high",
        "totalViews": 1.5,
        "workflows": {"id": 1},
        "categories": "Sales",
    }
    resp = await client.put("/templates/collections", json=payload)
    assert resp.status_code == 201
    data = resp.json()
    assert data["rank"] == 0
    assert data["totalViews"] is None
    assert data["workflows"] == []


@pytest.mark.asyncio
async def test_create_collection_skips_out_of_range_member_ids(client: AsyncClient):
    t1 = await _create_template(client, "One")
    payload = {"name": "Big", "createdAt": "x", "workflows": [{"id": 10**30}, {"id": t1}]}
    resp = await client.put("/templates/collections", json=payload)
    assert resp.status_code == 201

    listing = (await client.get("/templates/collections")).json()["collections"]
    assert listing[0]["workflows"] == [{"id": t1}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"collectionId": 2**63, "templateId": 1},
        {"collectionId": 1, "templateId": -(2**63) - 1},
    ],
)
async def test_add_workflow_rejects_ids_outside_integer_range(client: AsyncClient, body):
    resp = await client.patch("/templates/collections", json=body)
    assert resp.status_code == 400
