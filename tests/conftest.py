# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests del servicio de pagos.

- Defaults de entorno fail-closed (PYTHON_ENV=test desactiva el bypass)
- App FastAPI y cliente httpx con ciclo de vida (asgi-lifespan)
- Par de llaves RSA generado una vez por sesión
- Settings y repositorio de órdenes inyectados vía dependency_overrides
"""

import base64
import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# -----------------------------------------------------------------------------
# 0) Defaults de entorno (antes de importar la app)
# -----------------------------------------------------------------------------
os.environ.setdefault("PYTHON_ENV", "test")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("PAYMENTS_ALLOW_INSECURE_WEBHOOKS", "false")

from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

WECHAT_TEST_API_KEY = "192006250b4c09247ec02edce69f6a2d"


@pytest.fixture
def anyio_backend():
    # Permite usar @pytest.mark.anyio en tests async
    return "asyncio"


# -----------------------------------------------------------------------------
# 1) Llaves RSA de prueba
# -----------------------------------------------------------------------------
def _strip_pem(pem: bytes) -> str:
    """PEM -> base64 "desnudo" (formato de consola de Alipay)."""
    lines = pem.decode("ascii").strip().splitlines()
    return "".join(line for line in lines if not line.startswith("-----"))


@pytest.fixture(scope="session")
def rsa_keypair():
    """
    Par RSA 2048 de prueba.

    Returns:
        dict con private_pem, public_pem, private_b64 y public_b64
    """
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return {
        "private_pem": private_pem.decode("ascii"),
        "public_pem": public_pem.decode("ascii"),
        "private_b64": _strip_pem(private_pem),
        "public_b64": _strip_pem(public_pem),
        "private_key": private_key,
    }


@pytest.fixture(scope="session")
def other_rsa_public_b64():
    """Llave pública RSA que no corresponde al par de prueba."""
    other = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    der = other.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


# -----------------------------------------------------------------------------
# 2) Settings / repositorio
# -----------------------------------------------------------------------------
@pytest.fixture
def payments_settings(rsa_keypair):
    """Settings de producción con llaves de prueba configuradas."""
    from app.shared.config.settings_payments import PaymentsSettings

    return PaymentsSettings(
        _env_file=None,
        environment="production",
        python_env="test",
        payments_allow_insecure_webhooks=False,
        alipay_app_id="2021000000000000",
        alipay_public_key=rsa_keypair["public_b64"],
        alipay_private_key=rsa_keypair["private_b64"],
        wechat_app_id="wx2421b1c4370ec43b",
        wechat_mch_id="10000100",
        wechat_api_key=WECHAT_TEST_API_KEY,
    )


@pytest.fixture
def order_repository():
    from app.modules.payments.repositories import InMemoryOrderRepository

    return InMemoryOrderRepository()


@pytest.fixture
async def pending_order(order_repository):
    """Orden pendiente de 100.00 con referencia ORDER-1001."""
    from app.modules.payments.repositories import OrderRecord

    return await order_repository.add(OrderRecord(reference="ORDER-1001", amount=Decimal("100.00")))


# -----------------------------------------------------------------------------
# 3) App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture(scope="session")
def app():
    """Carga la aplicación principal de FastAPI **después** de setear env vars."""
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
async def async_client(app, payments_settings, order_repository) -> AsyncIterator[AsyncClient]:
    """
    Cliente HTTP asíncrono contra la app con ASGITransport y gestión de
    startup/shutdown mediante asgi-lifespan.
    """
    from app.modules.payments.repositories import get_order_repository
    from app.shared.config.settings_payments import get_payments_settings

    app.dependency_overrides[get_payments_settings] = lambda: payments_settings
    app.dependency_overrides[get_order_repository] = lambda: order_repository
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as client:
                yield client
    finally:
        app.dependency_overrides.clear()

# Fin del archivo backend/tests/conftest.py
