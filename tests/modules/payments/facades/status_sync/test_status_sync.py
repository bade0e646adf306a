# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/facades/status_sync/test_status_sync.py

Tests de sincronización de órdenes pendientes contra los gateways.

Autor: OpenAero
Fecha: 2026-10-19
"""
import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import httpx
import pytest

from app.modules.payments.enums import PaymentProvider, PaymentStatus
from app.modules.payments.facades.status_sync import sync_order_status, sync_pending_orders
from app.modules.payments.repositories import OrderRecord

pytestmark = pytest.mark.anyio


def _respond(body):
    return lambda request: httpx.Response(200, text=body)


async def _add_order(repository, reference="ORDER-1001", provider=PaymentProvider.ALIPAY, **fields):
    fields.setdefault("amount", Decimal("100.00"))
    return await repository.add(OrderRecord(reference=reference, provider=provider, **fields))


async def _sync(reference, order_repository, payments_settings, client):
    return await sync_order_status(
        reference,
        order_repository=order_repository,
        settings=payments_settings,
        client=client,
    )


class TestSyncOrderStatus:

    async def test_alipay_success_marks_paid(
        self, order_repository, payments_settings, alipay_query_body, mock_gateway_client
    ):
        await _add_order(order_repository)
        client = mock_gateway_client(_respond(alipay_query_body()))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is True

        order = await order_repository.get_by_reference("ORDER-1001")
        assert order.status == PaymentStatus.SUCCEEDED
        assert order.transaction_id == "2026101922001400001234567890"
        assert order.provider_status == "TRADE_SUCCESS"
        assert order.paid_at is not None

    async def test_alipay_amount_within_tolerance(
        self, order_repository, payments_settings, alipay_query_body, mock_gateway_client
    ):
        await _add_order(order_repository)
        client = mock_gateway_client(_respond(alipay_query_body(total_amount="99.99")))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is True
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.SUCCEEDED

    async def test_wechat_closed_marks_cancelled(
        self, order_repository, payments_settings, wechat_query_body, mock_gateway_client
    ):
        await _add_order(order_repository, provider=PaymentProvider.WECHAT)
        client = mock_gateway_client(_respond(wechat_query_body(trade_state="CLOSED")))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is True

        order = await order_repository.get_by_reference("ORDER-1001")
        assert order.status == PaymentStatus.CANCELLED
        assert order.failure_reason == "payment closed"
        assert order.provider_status == "CLOSED"

    async def test_wechat_payerror_marks_failed(
        self, order_repository, payments_settings, wechat_query_body, mock_gateway_client
    ):
        await _add_order(order_repository, provider=PaymentProvider.WECHAT)
        body = wechat_query_body(trade_state="PAYERROR", trade_state_desc="银行卡余额不足")
        client = mock_gateway_client(_respond(body))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is True

        order = await order_repository.get_by_reference("ORDER-1001")
        assert order.status == PaymentStatus.FAILED
        assert order.failure_reason == "银行卡余额不足"

    async def test_amount_mismatch_keeps_order_pending(
        self, order_repository, payments_settings, alipay_query_body, mock_gateway_client
    ):
        await _add_order(order_repository)
        client = mock_gateway_client(_respond(alipay_query_body(total_amount="50.00")))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is False
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.PENDING

    @pytest.mark.parametrize("total_fee", ["1e4", "10000.0", "1e999999999", None])
    async def test_wechat_total_fee_must_be_plain_integer(
        self, order_repository, payments_settings, wechat_query_body, mock_gateway_client, total_fee
    ):
        await _add_order(order_repository, provider=PaymentProvider.WECHAT)
        client = mock_gateway_client(_respond(wechat_query_body(total_fee=total_fee)))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is False
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.PENDING

    async def test_notpay_keeps_order_pending(
        self, order_repository, payments_settings, wechat_query_body, mock_gateway_client
    ):
        await _add_order(order_repository, provider=PaymentProvider.WECHAT)
        client = mock_gateway_client(_respond(wechat_query_body(trade_state="NOTPAY", transaction_id=None)))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is True
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.PENDING

    async def test_unrecognized_status_has_no_transition(
        self, order_repository, payments_settings, wechat_query_body, mock_gateway_client
    ):
        await _add_order(order_repository, provider=PaymentProvider.WECHAT)
        client = mock_gateway_client(_respond(wechat_query_body(trade_state="REFUND")))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is False
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.PENDING

    async def test_settled_order_is_not_queried(
        self, order_repository, payments_settings, mock_gateway_client, gateway_requests
    ):
        await _add_order(order_repository, status=PaymentStatus.SUCCEEDED, transaction_id="T-1")
        client = mock_gateway_client(_respond("{}"))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is True
        assert gateway_requests == []

    async def test_unknown_order(self, order_repository, payments_settings, mock_gateway_client):
        client = mock_gateway_client(_respond("{}"))
        assert await _sync("ORDER-404", order_repository, payments_settings, client) is False

    async def test_order_without_provider(
        self, order_repository, payments_settings, mock_gateway_client, gateway_requests
    ):
        await _add_order(order_repository, provider=None)
        client = mock_gateway_client(_respond("{}"))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is False
        assert gateway_requests == []

    async def test_gateway_unavailable(self, order_repository, payments_settings, mock_gateway_client):
        await _add_order(order_repository)
        client = mock_gateway_client(lambda request: httpx.Response(503))

        assert await _sync("ORDER-1001", order_repository, payments_settings, client) is False
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.PENDING


class TestSyncPendingOrders:

    async def test_batch_summary(
        self,
        order_repository,
        payments_settings,
        alipay_query_body,
        wechat_query_body,
        mock_gateway_client,
        gateway_requests,
    ):
        now = datetime.now(timezone.utc)
        await _add_order(order_repository, created_at=now - timedelta(hours=1))
        await _add_order(
            order_repository, "ORDER-2002", PaymentProvider.WECHAT, created_at=now - timedelta(hours=2)
        )
        await _add_order(order_repository, "ORDER-BROKEN", created_at=now - timedelta(hours=3))
        await _add_order(order_repository, "ORDER-OLD", created_at=now - timedelta(days=3))
        await _add_order(order_repository, "ORDER-PAID", status=PaymentStatus.SUCCEEDED)

        def handler(request):
            if request.url.host == "openapi.alipay.com":
                reference = json.loads(request.url.params["biz_content"])["out_trade_no"]
                if reference == "ORDER-BROKEN":
                    raise RuntimeError("unexpected transport failure")
                return httpx.Response(200, text=alipay_query_body(out_trade_no=reference))
            return httpx.Response(
                200, text=wechat_query_body(out_trade_no="ORDER-2002", trade_state="NOTPAY")
            )

        summary = await sync_pending_orders(
            order_repository=order_repository,
            settings=payments_settings,
            client=mock_gateway_client(handler),
        )

        assert summary.to_dict() == {"total": 3, "synced": 2, "failed": 1}
        assert len(gateway_requests) == 3
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.SUCCEEDED
        assert (await order_repository.get_by_reference("ORDER-2002")).status == PaymentStatus.PENDING
        assert (await order_repository.get_by_reference("ORDER-BROKEN")).status == PaymentStatus.PENDING
        assert (await order_repository.get_by_reference("ORDER-OLD")).status == PaymentStatus.PENDING

    async def test_limit_and_max_age(
        self, order_repository, payments_settings, alipay_query_body, mock_gateway_client, gateway_requests
    ):
        now = datetime.now(timezone.utc)
        await _add_order(order_repository, created_at=now - timedelta(minutes=5))
        await _add_order(order_repository, "ORDER-3003", created_at=now - timedelta(minutes=10))
        await _add_order(order_repository, "ORDER-4004", created_at=now - timedelta(hours=2))

        client = mock_gateway_client(_respond(alipay_query_body()))
        summary = await sync_pending_orders(
            order_repository=order_repository,
            settings=payments_settings,
            client=client,
            limit=1,
            max_age=timedelta(hours=1),
        )

        assert summary.total == 1
        assert summary.synced == 1
        assert (await order_repository.get_by_reference("ORDER-1001")).status == PaymentStatus.SUCCEEDED

    async def test_empty_batch(self, order_repository, payments_settings, mock_gateway_client):
        summary = await sync_pending_orders(
            order_repository=order_repository,
            settings=payments_settings,
            client=mock_gateway_client(_respond("{}")),
        )
        assert summary.to_dict() == {"total": 0, "synced": 0, "failed": 0}

# Fin del archivo backend/tests/modules/payments/facades/status_sync/test_status_sync.py
