async def _add_pet(api_client, name: str = "Rex", species: str = "dog", age: str = "3"):
    return await api_client.post("/add-pet", data={"name": name, "species": species, "age": age})


async def test_responses_include_x_request_id(api_client) -> None:
    resp = await api_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers.get("x-request-id")


async def test_add_pet_returns_list_item_fragment(api_client, store) -> None:
    resp = await _add_pet(api_client)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert 'id="pet-1"' in resp.text
    assert "Rex" in resp.text
    assert store.get_pet("1").age == 3


async def test_add_pet_rejects_invalid_age(api_client, store) -> None:
    resp = await _add_pet(api_client, age="old")

    assert resp.status_code == 400
    assert resp.text == "Invalid age"
    assert store.list_pets() == []


async def test_add_pet_without_age_is_invalid(api_client) -> None:
    resp = await api_client.post("/add-pet", data={"name": "Rex", "species": "dog"})
    assert resp.status_code == 400
    assert resp.text == "Invalid age"


async def test_delete_pet_returns_empty_body(api_client, store) -> None:
    await _add_pet(api_client)

    resp = await api_client.delete("/delete-pet/1")
    assert resp.status_code == 200
    assert resp.text == ""
    assert store.get_pet("1") is None


async def test_delete_unknown_pet_still_succeeds(api_client) -> None:
    resp = await api_client.delete("/delete-pet/999")
    assert resp.status_code == 200


async def test_get_edit_form_for_existing_pet(api_client) -> None:
    await _add_pet(api_client, name="Tom", species="cat", age="5")

    resp = await api_client.get("/edit-pet/1")
    assert resp.status_code == 200
    assert 'hx-post="/edit-pet/1"' in resp.text
    assert 'value="Tom"' in resp.text


async def test_get_edit_form_for_unknown_pet_is_404(api_client) -> None:
    resp = await api_client.get("/edit-pet/404")
    assert resp.status_code == 404
    assert resp.text == "Pet not found"


async def test_edit_pet_updates_record_and_renders_item(api_client, store) -> None:
    await _add_pet(api_client)

    resp = await api_client.post("/edit-pet/1", data={"name": "Rexy", "species": "wolf", "age": "4"})
    assert resp.status_code == 200
    assert "Rexy" in resp.text
    assert store.get_pet("1").model_dump() == {"id": "1", "name": "Rexy", "species": "wolf", "age": 4}


async def test_edit_pet_rejects_invalid_age_and_keeps_record(api_client, store) -> None:
    await _add_pet(api_client)

    resp = await api_client.post("/edit-pet/1", data={"name": "Rexy", "species": "wolf", "age": "4.5"})
    assert resp.status_code == 400
    assert resp.text == "Invalid age"
    assert store.get_pet("1").name == "Rex"


async def test_list_endpoints(api_client) -> None:
    await _add_pet(api_client, name="A")
    await _add_pet(api_client, name="B", species="cat", age="2")

    fragment = await api_client.get("/pets")
    assert fragment.status_code == 200
    assert 'id="pet-1"' in fragment.text
    assert 'id="pet-2"' in fragment.text

    listing = await api_client.get("/api/pets")
    assert listing.status_code == 200
    assert listing.json() == {
        "pets": [
            {"id": "1", "name": "A", "species": "dog", "age": 3},
            {"id": "2", "name": "B", "species": "cat", "age": 2},
        ]
    }


async def test_index_page_lists_pets_and_loads_static(api_client) -> None:
    await _add_pet(api_client, name="Biscuit")

    page = await api_client.get("/")
    assert page.status_code == 200
    assert 'hx-post="/add-pet"' in page.text
    assert "Biscuit" in page.text

    css = await api_client.get("/static/style.css")
    assert css.status_code == 200
    assert "pet-list" in css.text


async def test_add_pet_with_oversized_age_is_rejected(api_client, store) -> None:
    resp = await _add_pet(api_client, age="1" * 5000)

    assert resp.status_code == 400
    assert resp.text == "Invalid age"
    assert store.list_pets() == []


async def test_listing_still_works_after_upserting_unicode_digit_id(api_client) -> None:
    await _add_pet(api_client, name="A")

    upsert = await api_client.post("/edit-pet/%C2%B2", data={"name": "Squared", "species": "cat", "age": "2"})
    assert upsert.status_code == 200

    listing = await api_client.get("/api/pets")
    assert listing.status_code == 200
    assert [p["id"] for p in listing.json()["pets"]] == ["1", "²"]

    assert (await api_client.get("/pets")).status_code == 200
    assert (await api_client.get("/")).status_code == 200
