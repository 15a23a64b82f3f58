import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import app, get_settings


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", output_dir=tmp_path / "reports")


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestGenerateAndReport:
    def test_full_flow(self, client):
        resp = client.post("/api/v1/admin/generate", params={"sellers": 3, "products": 6, "seed": 11})
        assert resp.status_code == 200
        assert resp.json()["status"] == "generated"

        resp = client.get("/api/v1/products")
        assert resp.status_code == 200
        assert len(resp.json()["products"]) == 6

        resp = client.post("/api/v1/reports")
        assert resp.status_code == 200
        assert resp.json()["sources_skipped"] == 0

        resp = client.get("/api/v1/reports/sellers")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.text.startswith("Tipo Documento,Número Documento,Nombre,Apellido,Total Vendido\n")

        resp = client.get("/api/v1/reports/products")
        assert resp.text.startswith("ID,Nombre,Precio,Cantidad Vendida\n")


class TestErrors:
    def test_missing_sources_is_404(self, client):
        assert client.post("/api/v1/reports").status_code == 404
        assert client.get("/api/v1/sellers").status_code == 404

    def test_report_not_generated_is_404(self, client):
        assert client.get("/api/v1/reports/sellers").status_code == 404

    def test_bad_price_is_422(self, client, settings):
        settings.data_dir.mkdir(parents=True)
        settings.sellers_path.write_text("CC:1:Ana:Díaz\n", encoding="utf-8")
        settings.products_path.write_text("P001:Laptop 1:x\n", encoding="utf-8")
        assert client.post("/api/v1/reports").status_code == 422
        assert client.get("/api/v1/products").status_code == 422

    def test_invalid_counts_rejected(self, client):
        assert client.post("/api/v1/admin/generate", params={"sellers": 0}).status_code == 422

    def test_undecodable_source_is_422(self, client, settings):
        settings.data_dir.mkdir(parents=True)
        settings.sellers_path.write_bytes("CC:1:María:López\n".encode("latin-1"))
        settings.products_path.write_text("P001:Laptop 1:10\n", encoding="utf-8")
        resp = client.post("/api/v1/reports")
        assert resp.status_code == 422
        assert "not valid UTF-8" in resp.json()["detail"]
        assert client.get("/api/v1/sellers").status_code == 422
