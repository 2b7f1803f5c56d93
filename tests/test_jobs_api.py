API = "/api/v1"


def _signup_token(client, *, name: str, email: str, password: str = "secret1") -> str:
    client.post(
        f"{API}/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    r = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _create_job(client, headers: dict, **body):
    return client.post(f"{API}/jobs", json=body, headers=headers)


def test_register_login_create_and_list(client):
    token = _signup_token(client, name="Alice", email="a@b.com")
    headers = _auth_headers(token)

    r = _create_job(client, headers, role="Engineer", company="Acme", status="pending")
    assert r.status_code == 201, r.text
    job = r.json()["job"]
    assert job["role"] == "Engineer"
    assert job["status"] == "pending"

    r = client.get(f"{API}/jobs", headers=headers)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["count"] == 1
    assert len(data["jobs"]) == 1
    assert data["jobs"][0]["creator_name"] == "Alice"
    assert data["jobs"][0]["id"] == job["id"]


def test_create_job_validation(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))

    assert _create_job(client, headers, company="Acme").status_code == 400
    assert _create_job(client, headers, role="R" * 101, company="Acme").status_code == 400
    assert _create_job(client, headers, role="Engineer", company="C" * 51).status_code == 400
    r = _create_job(client, headers, role="Engineer", company="Acme", status="hired")
    assert r.status_code == 400
    assert "status" in r.json()["error"].lower()

    r = _create_job(client, headers, role="Engineer", company="Acme")
    assert r.status_code == 201
    assert r.json()["job"]["status"] == "pending"


def test_owner_id_comes_from_token_not_body(client):
    alice = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    _signup_token(client, name="Bobby", email="bob@b.com")

    r = client.post(
        f"{API}/jobs",
        json={"role": "Engineer", "company": "Acme", "created_by": 2},
        headers=alice,
    )
    assert r.status_code == 201
    assert r.json()["job"]["created_by"] == 1


def test_jobs_are_isolated_between_accounts(client):
    alice = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    bob = _auth_headers(_signup_token(client, name="Bobby", email="bob@b.com"))

    job_id = _create_job(client, alice, role="Engineer", company="Acme").json()["job"]["id"]

    assert client.get(f"{API}/jobs/{job_id}", headers=bob).status_code == 404
    assert client.patch(f"{API}/jobs/{job_id}", json={"role": "X"}, headers=bob).status_code == 404
    assert client.delete(f"{API}/jobs/{job_id}", headers=bob).status_code == 404
    assert client.get(f"{API}/jobs", headers=bob).json()["count"] == 0

    r = client.get(f"{API}/jobs/{job_id}", headers=alice)
    assert r.status_code == 200
    assert r.json()["job"]["role"] == "Engineer"


def test_get_missing_job_is_not_found(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    r = client.get(f"{API}/jobs/12345", headers=headers)
    assert r.status_code == 404, r.text
    assert r.json()["success"] is False


def test_patch_job_ignores_empty_values(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    job_id = _create_job(client, headers, role="Engineer", company="Acme", status="interview").json()["job"]["id"]

    r = client.patch(
        f"{API}/jobs/{job_id}",
        json={"role": "Senior Engineer", "company": "", "status": ""},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    job = r.json()["job"]
    assert job["role"] == "Senior Engineer"
    assert job["company"] == "Acme"
    assert job["status"] == "interview"

    r = client.patch(f"{API}/jobs/{job_id}", json={"status": "decline"}, headers=headers)
    assert r.json()["job"]["status"] == "decline"


def test_delete_job(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    job_id = _create_job(client, headers, role="Engineer", company="Acme").json()["job"]["id"]

    r = client.delete(f"{API}/jobs/{job_id}", headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["deleted_job_id"] == job_id

    assert client.delete(f"{API}/jobs/{job_id}", headers=headers).status_code == 404
    assert client.get(f"{API}/jobs/{job_id}", headers=headers).status_code == 404


def test_patch_job_applies_whitespace_only_role(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    job_id = _create_job(client, headers, role="Engineer", company="Acme").json()["job"]["id"]

    r = client.patch(f"{API}/jobs/{job_id}", json={"role": "   "}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["job"]["role"] == "   "


def test_wrong_field_type_is_bad_request(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    job_id = _create_job(client, headers, role="Engineer", company="Acme").json()["job"]["id"]

    r = client.patch(f"{API}/jobs/{job_id}", json={"role": 123}, headers=headers)
    assert r.status_code == 400, r.text
    assert r.json()["success"] is False

    r = _create_job(client, headers, role=["Engineer"], company="Acme")
    assert r.status_code == 400, r.text


def test_create_job_after_account_deleted(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))
    assert client.delete(f"{API}/auth/account", headers=headers).status_code == 200

    r = _create_job(client, headers, role="Engineer", company="Acme")
    assert r.status_code == 404, r.text
    assert "account" in r.json()["error"].lower()


def test_router_errors_use_error_body(client):
    headers = _auth_headers(_signup_token(client, name="Alice", email="a@b.com"))

    r = client.get(f"{API}/jobs/not-a-number", headers=headers)
    assert r.status_code == 404, r.text
    assert r.json()["success"] is False

    r = client.get(f"{API}/nowhere")
    assert r.status_code == 404
    assert r.json()["success"] is False
    assert r.json()["error"] == "Not Found"

    r = client.put(f"{API}/jobs", headers=headers)
    assert r.status_code == 405
    assert r.json()["success"] is False
