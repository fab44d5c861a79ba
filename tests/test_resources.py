from datetime import datetime, timedelta

import pytest

from negocio_api.models.resource import TenantResource

from conftest import SUPER_ADMIN_HEADERS


def test_create_and_get_round_trip(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/servicios"

    created = client.post(base, json={"nombre": "Catering", "orden": 2}, headers=auth_headers)
    assert created.status_code == 200
    body = created.json()
    assert body["success"] is True
    resource_id = body["id"]

    doc = client.get(f"{base}/{resource_id}").json()
    assert set(doc) == {"id", "nombre", "orden", "fechaCreacion"}
    assert doc["id"] == resource_id
    assert doc["nombre"] == "Catering"
    assert doc["orden"] == 2


def test_system_fields_cannot_be_set(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/testimonios"

    resource_id = client.post(
        base,
        json={"id": "forced", "fechaCreacion": "1999-01-01", "texto": "Excelente"},
        headers=auth_headers,
    ).json()["id"]

    doc = client.get(f"{base}/{resource_id}").json()
    assert resource_id != "forced"
    assert doc["id"] == resource_id
    assert not doc["fechaCreacion"].startswith("1999")


def test_new_products_are_active(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/productos"

    resource_id = client.post(base, json={"nombre": "Espresso", "precio": 2.5}, headers=auth_headers).json()["id"]

    assert client.get(f"{base}/{resource_id}").json()["activo"] is True


def test_update_is_a_partial_merge(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/productos"
    resource_id = client.post(base, json={"nombre": "Espresso", "precio": 2.5}, headers=auth_headers).json()["id"]

    response = client.put(f"{base}/{resource_id}", json={"precio": 3}, headers=auth_headers)
    assert response.status_code == 200

    doc = client.get(f"{base}/{resource_id}").json()
    assert doc["nombre"] == "Espresso"
    assert doc["precio"] == 3
    assert "fechaActualizacion" in doc
    assert response.json()["precio"] == 3


def test_ordered_collections_sort_by_orden(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/galeria"
    for orden in (3, 1, 2):
        client.post(base, json={"titulo": f"foto {orden}", "orden": orden}, headers=auth_headers)
    client.post(base, json={"titulo": "sin orden"}, headers=auth_headers)

    items = client.get(base).json()["galeria"]

    assert [item.get("orden") for item in items] == [1, 2, 3, None]


def test_reordering_moves_an_item(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/casos-exito"
    first = client.post(base, json={"titulo": "A", "orden": 1}, headers=auth_headers).json()["id"]
    client.post(base, json={"titulo": "B", "orden": 2}, headers=auth_headers)

    client.put(f"{base}/{first}", json={"orden": 5}, headers=auth_headers)

    items = client.get(base).json()["casosExito"]
    assert [item["titulo"] for item in items] == ["B", "A"]


def test_orders_are_listed_newest_first(client, negocio, db_session):
    base = f"/api/{negocio['negocioID']}/pedidos"
    ids = [client.post(base, json={"cliente": name}).json()["id"] for name in ("Ana", "Luis", "Eva")]

    start = datetime(2024, 1, 1)
    for offset, resource_id in enumerate(ids):
        doc = db_session.get(TenantResource, resource_id)
        doc.created_at = start + timedelta(minutes=offset)
    db_session.commit()

    items = client.get(base).json()["pedidos"]
    assert [item["cliente"] for item in items] == ["Eva", "Luis", "Ana"]


def test_solo_activos_filters_products(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/productos"
    client.post(base, json={"nombre": "Espresso"}, headers=auth_headers)
    hidden = client.post(base, json={"nombre": "Mocha"}, headers=auth_headers).json()["id"]
    client.put(f"{base}/{hidden}", json={"activo": False}, headers=auth_headers)

    everything = client.get(base).json()["productos"]
    active = client.get(base, params={"soloActivos": "true"}).json()["productos"]

    assert len(everything) == 2
    assert [p["nombre"] for p in active] == ["Espresso"]


def test_delete(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/servicios"
    resource_id = client.post(base, json={"nombre": "Catering"}, headers=auth_headers).json()["id"]

    response = client.delete(f"{base}/{resource_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.get(f"{base}/{resource_id}").status_code == 404
    assert client.delete(f"{base}/{resource_id}", headers=auth_headers).status_code == 404


def test_update_missing_document(client, negocio, auth_headers):
    response = client.put(
        f"/api/{negocio['negocioID']}/servicios/nope", json={"nombre": "x"}, headers=auth_headers
    )
    assert response.status_code == 404


def test_ids_do_not_cross_negocios(client, create_negocio, login):
    first = create_negocio("Uno")
    second = create_negocio("Dos")
    resource_id = client.post(
        f"/api/{first['negocioID']}/productos", json={"nombre": "Pan"}, headers=login(first)
    ).json()["id"]

    assert client.get(f"/api/{second['negocioID']}/productos/{resource_id}").status_code == 404
    assert client.get(f"/api/{second['negocioID']}/productos").json() == {"productos": []}
    assert client.delete(
        f"/api/{second['negocioID']}/productos/{resource_id}", headers=login(second)
    ).status_code == 404


def test_ids_do_not_cross_collections(client, negocio, auth_headers):
    negocio_id = negocio["negocioID"]
    resource_id = client.post(
        f"/api/{negocio_id}/productos", json={"nombre": "Pan"}, headers=auth_headers
    ).json()["id"]

    assert client.get(f"/api/{negocio_id}/servicios/{resource_id}").status_code == 404


def test_visitors_can_place_orders(client, negocio):
    base = f"/api/{negocio['negocioID']}/pedidos"

    response = client.post(base, json={"cliente": "Ana", "estado": "entregado", "total": 12.5})
    assert response.status_code == 200

    doc = client.get(f"{base}/{response.json()['id']}").json()
    assert doc["estado"] == "pendiente"
    assert doc["total"] == 12.5


def test_orders_need_an_existing_negocio(client):
    assert client.post("/api/neg_0000000000000000/pedidos", json={"cliente": "Ana"}).status_code == 404


def test_visitors_cannot_edit_orders(client, negocio):
    base = f"/api/{negocio['negocioID']}/pedidos"
    resource_id = client.post(base, json={"cliente": "Ana"}).json()["id"]

    assert client.put(f"{base}/{resource_id}", json={"total": 0}).status_code == 401
    assert client.patch(f"{base}/{resource_id}/estado", json={"estado": "cancelado"}).status_code == 401


@pytest.mark.parametrize("estado", ["confirmado", "enviado", "entregado", "cancelado"])
def test_order_status_change(client, negocio, auth_headers, estado):
    base = f"/api/{negocio['negocioID']}/pedidos"
    resource_id = client.post(base, json={"cliente": "Ana"}).json()["id"]

    response = client.patch(f"{base}/{resource_id}/estado", json={"estado": estado}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["estado"] == estado
    assert client.get(f"{base}/{resource_id}").json()["estado"] == estado


def test_unknown_order_status_is_rejected(client, negocio, auth_headers):
    base = f"/api/{negocio['negocioID']}/pedidos"
    resource_id = client.post(base, json={"cliente": "Ana"}).json()["id"]

    patch = client.patch(f"{base}/{resource_id}/estado", json={"estado": "perdido"}, headers=auth_headers)
    put = client.put(f"{base}/{resource_id}", json={"estado": "perdido"}, headers=auth_headers)

    assert patch.status_code == 400
    assert put.status_code == 400
    assert client.get(f"{base}/{resource_id}").json()["estado"] == "pendiente"


def test_status_change_on_missing_order(client, negocio, auth_headers):
    response = client.patch(
        f"/api/{negocio['negocioID']}/pedidos/nope/estado", json={"estado": "enviado"}, headers=auth_headers
    )
    assert response.status_code == 404


def test_unknown_collection(client, negocio, auth_headers):
    negocio_id = negocio["negocioID"]

    assert client.get(f"/api/{negocio_id}/clientes").status_code == 400
    assert client.post(f"/api/{negocio_id}/clientes", json={"x": 1}, headers=auth_headers).status_code == 400


def test_body_must_be_an_object(client, negocio, auth_headers):
    response = client.post(f"/api/{negocio['negocioID']}/productos", json=["x"], headers=auth_headers)
    assert response.status_code == 400


def test_cafe_luna_storefront(client, create_negocio, login):
    negocio = create_negocio("Café Luna", "hola@cafeluna.com")
    assert negocio["user"].startswith("cafe-luna-")
    negocio_id = negocio["negocioID"]
    headers = login(negocio)

    client.post(
        f"/api/{negocio_id}/brief",
        json={"config": {"slogan": "Café de especialidad"}, "productosIniciales": [{"nombre": "Espresso"}]},
        headers=headers,
    )
    client.post(f"/api/{negocio_id}/servicios", json={"nombre": "Catering", "orden": 1}, headers=headers)
    client.post(f"/api/{negocio_id}/testimonios", json={"autor": "Ana", "texto": "Delicioso"}, headers=headers)

    order_id = client.post(f"/api/{negocio_id}/pedidos", json={"cliente": "Luis", "items": ["Espresso"]}).json()["id"]
    client.patch(f"/api/{negocio_id}/pedidos/{order_id}/estado", json={"estado": "confirmado"}, headers=headers)

    assert client.get(f"/api/{negocio_id}/config").json()["slogan"] == "Café de especialidad"
    assert [p["nombre"] for p in client.get(f"/api/{negocio_id}/productos").json()["productos"]] == ["Espresso"]
    assert len(client.get(f"/api/{negocio_id}/servicios").json()["servicios"]) == 1
    assert len(client.get(f"/api/{negocio_id}/testimonios").json()["testimonios"]) == 1

    pedidos = client.get(f"/api/{negocio_id}/pedidos").json()["pedidos"]
    assert [(p["cliente"], p["estado"]) for p in pedidos] == [("Luis", "confirmado")]

    client.delete(f"/api/super-admin/negocios/{negocio_id}", headers=SUPER_ADMIN_HEADERS)
    assert client.get(f"/api/{negocio_id}/config").status_code == 404
    assert client.get(f"/api/{negocio_id}/productos").status_code == 404
