import pytest
from fastapi.testclient import TestClient

from negocio_api.main import app
from negocio_api.api.deps import get_text_generator
from negocio_api.services.text_generation import TextGenerator, TemplateTextGenerator


@pytest.mark.parametrize("tipo", ["sobre-nosotros", "mision", "vision"])
def test_generar_texto_templates(client, tipo):
    response = client.post("/api/ia/generar-texto", json={"tipo": tipo, "prompt": "café"})
    assert response.status_code == 200
    assert response.json()["texto"] == TemplateTextGenerator.TEMPLATES[tipo]


def test_generar_texto_unknown_block_echoes_prompt(client):
    response = client.post("/api/ia/generar-texto", json={"tipo": "eslogan", "prompt": "Café de barrio"})
    assert response.json() == {"texto": "Café de barrio"}


def test_generar_texto_requires_tipo(client):
    assert client.post("/api/ia/generar-texto", json={"prompt": "x"}).status_code == 400


def test_generator_can_be_swapped(client):
    class UpperGenerator(TextGenerator):
        def generate(self, tipo, prompt):
            return prompt.upper()

    app.dependency_overrides[get_text_generator] = UpperGenerator
    try:
        response = client.post("/api/ia/generar-texto", json={"tipo": "mision", "prompt": "hola"})
    finally:
        app.dependency_overrides.pop(get_text_generator, None)

    assert response.json() == {"texto": "HOLA"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Process-Time" in response.headers


def test_root_banner(client):
    assert client.get("/").json()["message"] == "API Multi-tenant funcionando"


def test_internal_errors_are_not_leaked(negocio, monkeypatch):
    from negocio_api.services import resource_service

    def broken(*args, **kwargs):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(resource_service, "list_resources", broken)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get(f"/api/{negocio['negocioID']}/productos")

    assert response.status_code == 500
    assert response.json() == {"detail": "Error interno del servidor", "type": "internal_error"}
