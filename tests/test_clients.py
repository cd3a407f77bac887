from conftest import auth_header


def test_tailor_lists_own_clients_most_recent_first(client, register, tailor_token, add_client):
    first = add_client(tailor_token, "one@example.com")["client"]["id"]
    second = add_client(tailor_token, "two@example.com")["client"]["id"]
    rival_token = register("rival@example.com")["token"]
    add_client(rival_token, "three@example.com")

    listed = client.get("/clients", headers=auth_header(tailor_token)).json()
    assert [c["id"] for c in listed] == [second, first]


def test_foreign_client_is_not_found(client, register, tailor_token, add_client):
    client_id = add_client(tailor_token, "one@example.com")["client"]["id"]
    rival_token = register("rival@example.com")["token"]

    for response in (
        client.get(f"/clients/{client_id}", headers=auth_header(rival_token)),
        client.put(f"/clients/{client_id}", json={"notes": "mine now"}, headers=auth_header(rival_token)),
        client.get(f"/clients/{'0' * 8}", headers=auth_header(rival_token)),
    ):
        assert response.status_code == 404
        assert response.json()["detail"] == "Client not found"


def test_linked_client_reads_and_updates_profile(client, tailor_token, add_client):
    created = add_client(tailor_token, "me@example.com", password="client-password", notes="Tailor notes")
    client_id = created["client"]["id"]
    token = client.post("/auth/login", json={"email": "me@example.com", "password": "client-password"}).json()["token"]

    profile = client.get("/clients", headers=auth_header(token)).json()
    assert profile["id"] == client_id

    updated = client.put(f"/clients/{client_id}", json={"storeName": "Uptown"}, headers=auth_header(token))
    assert updated.status_code == 200
    assert updated.json()["storeName"] == "Uptown"
    assert updated.json()["notes"] == "Tailor notes"


def test_anonymous_has_no_client_profile(client):
    token = client.post("/auth/anonymous").json()["token"]
    response = client.get("/clients", headers=auth_header(token))
    assert response.status_code == 404
    assert response.json()["detail"] == "Client profile not found"


def test_anonymous_cannot_open_client_records(client, tailor_token, add_client):
    client_id = add_client(tailor_token, "one@example.com")["client"]["id"]
    token = client.post("/auth/anonymous").json()["token"]
    assert client.get(f"/clients/{client_id}", headers=auth_header(token)).status_code == 401
