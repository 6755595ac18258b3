from fastapi.testclient import TestClient
from tidy_data.main import app
from tidy_data.settings import Settings, get_settings

client = TestClient(app)

SAMPLE = (
    "name,email\n"
    " bob ,bob@x.com\n"
    "Bob,BOB@x.com\n"
    "\n"
    "ann,ann@x.com\n"
)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_clean_pasted_text():
    r = client.post("/clean", data={"text": SAMPLE})
    assert r.status_code == 200

    data = r.json()
    assert data["cleaned_csv"]["content"] == "name,email\nBob,bob@x.com\nAnn,ann@x.com"
    assert data["cleaned_csv"]["encoding"] == "utf-8"
    assert len(data["cleaned_csv"]["sha256"]) == 64
    assert data["stats"] == {"original_rows": 3, "cleaned_rows": 2, "removed_rows": 1, "columns": 2}
    assert data["decoding"] == {}
    assert data["preview_truncated"] is False


def test_clean_options_from_form():
    r = client.post("/clean", data={"text": SAMPLE, "deduplicate": "false", "has_header": "false"})
    assert r.status_code == 200
    assert r.json()["stats"]["cleaned_rows"] == 4


def test_clean_upload_latin1():
    # Include a Latin-1 character to force non-ASCII handling
    raw = "name,city\nPaul,Montréal\n".encode("latin-1")

    files = {"file": ("test.csv", raw, "text/csv")}
    r = client.post("/clean", files=files)
    assert r.status_code == 200

    data = r.json()
    assert "Montréal" in data["cleaned_csv"]["content"]
    assert data["decoding"]["detected"] is not None


def test_rejects_non_csv_upload():
    files = {"file": ("notes.txt", b"a,b\n", "text/plain")}
    r = client.post("/clean", files=files)
    assert r.status_code == 422


def test_rejects_missing_input():
    assert client.post("/clean", data={"text": "   \n"}).status_code == 400
    assert client.post("/clean", data={}).status_code == 400


def test_rejects_negative_dedupe_column():
    r = client.post("/clean", data={"text": SAMPLE, "dedupe_column": "-1"})
    assert r.status_code == 422


def test_preview_is_truncated():
    app.dependency_overrides[get_settings] = lambda: Settings(PREVIEW_ROWS=2)
    try:
        r = client.post("/clean", data={"text": SAMPLE})
    finally:
        app.dependency_overrides.clear()

    data = r.json()
    assert data["preview"] == "name,email\nBob,bob@x.com"
    assert data["preview_truncated"] is True


def test_download():
    r = client.post("/clean/download", data={"text": SAMPLE})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="tidy-data.csv"' in r.headers["content-disposition"]
    assert r.text == "name,email\nBob,bob@x.com\nAnn,ann@x.com\n"


def test_preview_counts_header_toward_limit():
    app.dependency_overrides[get_settings] = lambda: Settings(PREVIEW_ROWS=1)
    try:
        r = client.post("/clean", data={"text": SAMPLE})
    finally:
        app.dependency_overrides.clear()

    assert r.json()["preview"] == "name,email"


def test_rejects_oversized_upload():
    app.dependency_overrides[get_settings] = lambda: Settings(MAX_UPLOAD_BYTES=8)
    try:
        files = {"file": ("big.csv", b"name,email\nann,ann@x.com\n", "text/csv")}
        r = client.post("/clean", files=files)
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 413
