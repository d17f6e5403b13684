import json

import pytest

from estateview.main import app
from estateview.services.image_storage import ImageStorage, get_image_storage

from conftest import build_property

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

PROPERTY_FORM = {
    "title": "Lake View Villa",
    "description": "Four bedroom villa facing the lake",
    "type": "Villa",
    "status": "For Sale",
    "featured": "true",
    "bedrooms": "4",
    "bathrooms": "3",
    "area": "3200 sq ft",
    "city": "Udaipur",
    "state": "Rajasthan",
    "pincode": "313001",
    "price": "8500000",
    "amenities": json.dumps(["Pool", "Garden"]),
}


def _stored_files(uploads_dir):
    if not uploads_dir.exists():
        return set()
    return {path.name for path in uploads_dir.iterdir()}


# ---------------- PROPERTIES ----------------


@pytest.mark.asyncio
async def test_create_property_with_image(client, admin_headers, uploads_dir):
    response = await client.post(
        "/api/admin/properties",
        headers=admin_headers,
        data=PROPERTY_FORM,
        files=[("images", ("front.png", PNG_BYTES, "image/png"))],
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Property created successfully"

    data = body["data"]
    assert data["location"] == "Udaipur, Rajasthan"
    assert data["priceFormatted"] == "₹85,00,000"
    assert data["featured"] is True
    assert data["amenities"] == ["Pool", "Garden"]
    assert len(data["images"]) == 1

    image_url = data["images"][0]
    assert image_url.startswith("/uploads/images-")
    assert image_url.endswith(".png")
    assert (uploads_dir / image_url.rsplit("/", 1)[-1]).read_bytes() == PNG_BYTES


@pytest.mark.asyncio
async def test_create_property_with_loose_numbers_uses_defaults(client, admin_headers):
    form = dict(PROPERTY_FORM, bedrooms="lots", price="expensive", featured="yes")

    response = await client.post("/api/admin/properties", headers=admin_headers, data=form)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["bedrooms"] == 1
    assert data["price"] == 0
    assert data["priceFormatted"] == "₹0"
    assert data["featured"] is False
    assert data["images"] == []


@pytest.mark.asyncio
async def test_create_property_without_city_is_rejected(client, admin_headers):
    form = {key: value for key, value in PROPERTY_FORM.items() if key != "city"}

    response = await client.post("/api/admin/properties", headers=admin_headers, data=form)

    assert response.status_code == 422
    assert response.json()["message"] == "Invalid request"


@pytest.mark.asyncio
async def test_non_image_upload_is_rejected_and_nothing_is_written(
    client, admin_headers, uploads_dir
):
    before = _stored_files(uploads_dir)

    response = await client.post(
        "/api/admin/properties",
        headers=admin_headers,
        data=PROPERTY_FORM,
        files=[
            ("images", ("front.png", PNG_BYTES, "image/png")),
            ("images", ("notes.txt", b"hello", "text/plain")),
        ],
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Only image files are allowed"}
    assert _stored_files(uploads_dir) == before

    listing = await client.get("/api/admin/properties", headers=admin_headers)
    assert listing.json()["total"] == 0


@pytest.mark.asyncio
async def test_oversized_upload_is_rejected(client, admin_headers, uploads_dir):
    app.dependency_overrides[get_image_storage] = lambda: ImageStorage(max_bytes=10)
    before = _stored_files(uploads_dir)

    response = await client.post(
        "/api/admin/properties",
        headers=admin_headers,
        data=PROPERTY_FORM,
        files=[("images", ("front.png", PNG_BYTES, "image/png"))],
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("File too large")
    assert _stored_files(uploads_dir) == before


@pytest.mark.asyncio
async def test_update_price_only_refreshes_formatted_price(
    client, admin_headers, seed_properties
):
    await seed_properties(build_property(1, city="Pune", state="Maharashtra", price=1_000_000))

    response = await client.put(
        "/api/admin/properties/1",
        headers=admin_headers,
        data={"price": "2500000"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["price"] == 2_500_000
    assert data["priceFormatted"] == "₹25,00,000"
    assert data["location"] == "Pune, Maharashtra"
    assert data["title"] == "Listing 1"


@pytest.mark.asyncio
async def test_update_city_refreshes_location(client, admin_headers, seed_properties):
    await seed_properties(build_property(1, city="Pune", state="Maharashtra"))

    response = await client.put(
        "/api/admin/properties/1",
        headers=admin_headers,
        data={"city": "Nagpur"},
    )

    data = response.json()["data"]
    assert data["city"] == "Nagpur"
    assert data["location"] == "Nagpur, Maharashtra"


@pytest.mark.asyncio
async def test_update_ignores_invalid_values(client, admin_headers, seed_properties):
    await seed_properties(build_property(1, bedrooms=3))

    response = await client.put(
        "/api/admin/properties/1",
        headers=admin_headers,
        data={"bedrooms": "three", "featured": "maybe"},
    )

    data = response.json()["data"]
    assert data["bedrooms"] == 3
    assert data["featured"] is False


@pytest.mark.asyncio
async def test_update_keeps_listed_images_and_appends_uploads(
    client, admin_headers, seed_properties
):
    prop = build_property(1)
    prop.image_list = ["/uploads/images-1-1.png", "/uploads/images-1-2.png"]
    await seed_properties(prop)

    response = await client.put(
        "/api/admin/properties/1",
        headers=admin_headers,
        data={"existingImages": json.dumps(["/uploads/images-1-2.png"])},
        files=[("images", ("back.jpg", PNG_BYTES, "image/jpeg"))],
    )

    images = response.json()["data"]["images"]
    assert images[0] == "/uploads/images-1-2.png"
    assert len(images) == 2
    assert images[1].endswith(".jpg")


@pytest.mark.asyncio
async def test_update_missing_property_is_not_found(client, admin_headers):
    response = await client.put(
        "/api/admin/properties/99",
        headers=admin_headers,
        data={"price": "1"},
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Property not found"


@pytest.mark.asyncio
async def test_delete_property_returns_snapshot(client, admin_headers, seed_properties):
    await seed_properties(build_property(1), build_property(2))

    response = await client.delete("/api/admin/properties/1", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["id"] == 1
    assert (await client.get("/api/properties/1")).status_code == 404

    remaining = await client.get("/api/admin/properties", headers=admin_headers)
    assert [p["id"] for p in remaining.json()["data"]] == [2]


# ---------------- TESTIMONIALS ----------------


@pytest.mark.asyncio
async def test_create_testimonial_defaults_invalid_rating(client, admin_headers):
    response = await client.post(
        "/api/admin/testimonials",
        headers=admin_headers,
        data={
            "content": "Smooth purchase from start to finish",
            "author": "Priya Sharma",
            "location": "Bengaluru",
            "rating": "9",
            "profileImage": "https://example.com/priya.jpg",
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["rating"] == 5
    assert data["profileImage"] == "https://example.com/priya.jpg"
    assert data["featured"] is False


@pytest.mark.asyncio
async def test_create_testimonial_with_uploaded_profile_image(
    client, admin_headers, uploads_dir
):
    response = await client.post(
        "/api/admin/testimonials",
        headers=admin_headers,
        data={"content": "Great agents", "author": "Rahul", "rating": "4"},
        files={"profileImage": ("rahul.gif", b"GIF89a", "image/gif")},
    )

    data = response.json()["data"]
    assert data["rating"] == 4
    assert data["profileImage"].startswith("/uploads/profileImage-")
    assert (uploads_dir / data["profileImage"].rsplit("/", 1)[-1]).exists()


@pytest.mark.asyncio
async def test_update_testimonial_and_public_featured_filter(client, admin_headers):
    created = await client.post(
        "/api/admin/testimonials",
        headers=admin_headers,
        data={"content": "Helpful", "author": "Anita", "rating": "3"},
    )
    testimonial_id = created.json()["data"]["id"]

    response = await client.put(
        f"/api/admin/testimonials/{testimonial_id}",
        headers=admin_headers,
        data={"featured": "true", "rating": "0"},
    )

    data = response.json()["data"]
    assert data["featured"] is True
    assert data["rating"] == 3

    featured = await client.get("/api/testimonials", params={"featured": "true"})
    body = featured.json()
    assert [t["id"] for t in body["data"]] == [testimonial_id]
    assert "total" not in body


@pytest.mark.asyncio
async def test_delete_missing_testimonial_is_not_found(client, admin_headers):
    response = await client.delete("/api/admin/testimonials/5", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Testimonial not found"}


# ---------------- FAQS ----------------


@pytest.mark.asyncio
async def test_faq_lifecycle(client, admin_headers):
    first = await client.post(
        "/api/admin/faqs",
        headers=admin_headers,
        json={"question": "Do you charge brokerage?", "answer": "One percent.", "order": 2},
    )
    second = await client.post(
        "/api/admin/faqs",
        headers=admin_headers,
        json={
            "question": "Can I schedule a visit?",
            "answer": "Yes, any weekday.",
            "category": "Visits",
            "order": 1,
            "featured": True,
        },
    )

    assert first.status_code == 201
    assert first.json()["data"]["category"] == "General"
    second_id = second.json()["data"]["id"]

    listed = await client.get("/api/faqs")
    assert [f["question"] for f in listed.json()["data"]] == [
        "Can I schedule a visit?",
        "Do you charge brokerage?",
    ]

    patched = await client.put(
        f"/api/admin/faqs/{second_id}",
        headers=admin_headers,
        json={"answer": "Yes, any day of the week."},
    )
    assert patched.json()["data"]["answer"] == "Yes, any day of the week."
    assert patched.json()["data"]["category"] == "Visits"

    by_category = await client.get("/api/faqs", params={"category": "Visits"})
    assert [f["id"] for f in by_category.json()["data"]] == [second_id]

    deleted = await client.delete(f"/api/admin/faqs/{second_id}", headers=admin_headers)
    assert deleted.status_code == 200
    remaining = await client.get("/api/admin/faqs", headers=admin_headers)
    assert remaining.json()["total"] == 1


@pytest.mark.asyncio
async def test_faq_patch_rejects_unknown_fields(client, admin_headers):
    created = await client.post(
        "/api/admin/faqs",
        headers=admin_headers,
        json={"question": "Q?", "answer": "A."},
    )
    faq_id = created.json()["data"]["id"]

    response = await client.put(
        f"/api/admin/faqs/{faq_id}",
        headers=admin_headers,
        json={"id": 77, "createdAt": "2020-01-01"},
    )

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request"


# ---------------- STATISTICS ----------------


@pytest.mark.asyncio
async def test_statistics_endpoint(client, admin_headers, seed_properties):
    await seed_properties(
        build_property(1, type="Villa", city="Goa", price=3_000_000, featured=True),
        build_property(2, type="Loft", city="Goa", price=2_000_000),
    )
    await client.post(
        "/api/admin/faqs",
        headers=admin_headers,
        json={"question": "Q?", "answer": "A."},
    )

    response = await client.get("/api/admin/stats", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {
        "totalProperties": 2,
        "featuredProperties": 1,
        "totalTestimonials": 0,
        "totalFAQs": 1,
        "propertiesByType": {"Villa": 1, "Loft": 1},
        "propertiesByCity": {"Goa": 2},
        "totalValue": 5_000_000,
        "averagePrice": 2_500_000,
    }


# ---------------- LENIENT INPUT ----------------


@pytest.mark.asyncio
async def test_unknown_property_type_falls_back_to_default(client, admin_headers):
    form = dict(PROPERTY_FORM, type="Studio", status="Leased")

    response = await client.post("/api/admin/properties", headers=admin_headers, data=form)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["type"] == "Apartment"
    assert data["status"] == "For Sale"


@pytest.mark.asyncio
async def test_property_type_matches_regardless_of_case(client, admin_headers):
    form = dict(PROPERTY_FORM, type="penthouse", status="for rent")

    response = await client.post("/api/admin/properties", headers=admin_headers, data=form)

    data = response.json()["data"]
    assert data["type"] == "Penthouse"
    assert data["status"] == "For Rent"


@pytest.mark.asyncio
async def test_update_ignores_unknown_type_and_status(client, admin_headers, seed_properties):
    await seed_properties(build_property(1, type="Villa", status="Sold"))

    response = await client.put(
        "/api/admin/properties/1",
        headers=admin_headers,
        data={"type": "Castle", "status": "Gone", "title": "Renamed"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["type"] == "Villa"
    assert data["status"] == "Sold"
    assert data["title"] == "Renamed"


@pytest.mark.asyncio
async def test_price_too_large_to_store_is_treated_as_malformed(
    client, admin_headers, seed_properties
):
    form = dict(PROPERTY_FORM, price="99999999999999999999")

    created = await client.post("/api/admin/properties", headers=admin_headers, data=form)

    assert created.status_code == 201
    assert created.json()["data"]["price"] == 0

    await seed_properties(build_property(50, price=4_000_000))
    updated = await client.put(
        "/api/admin/properties/50",
        headers=admin_headers,
        data={"price": str(2**63), "bedrooms": str(2**70)},
    )

    assert updated.status_code == 200
    data = updated.json()["data"]
    assert data["price"] == 4_000_000
    assert data["bedrooms"] == 2


@pytest.mark.asyncio
async def test_faq_order_too_large_to_store_falls_back(client, admin_headers):
    response = await client.post(
        "/api/admin/faqs",
        headers=admin_headers,
        json={"question": "Q?", "answer": "A.", "order": 2**64},
    )

    assert response.status_code == 201
    assert response.json()["data"]["order"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path,message",
    [
        ("put", "/api/admin/properties/abc", "Property not found"),
        ("delete", "/api/admin/properties/99999999999999999999", "Property not found"),
        ("put", "/api/admin/testimonials/-3", "Testimonial not found"),
        ("delete", "/api/admin/faqs/one", "FAQ not found"),
    ],
)
async def test_malformed_admin_ids_are_not_found(client, admin_headers, method, path, message):
    response = await client.request(method, path, headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": message}
