# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/constants.py

Constantes para callbacks Alipay/WeChat Pay.
"""

# Alipay trade_status
ALIPAY_STATUS_SUCCESS = ["TRADE_SUCCESS", "TRADE_FINISHED"]
ALIPAY_STATUS_FAILED = ["TRADE_CLOSED"]

# WeChat Pay v2 return_code / result_code
WECHAT_CODE_SUCCESS = "SUCCESS"
WECHAT_CODE_FAIL = "FAIL"

ALIPAY_SUCCESS_STATUSES = set(ALIPAY_STATUS_SUCCESS)
ALIPAY_FAILED_STATUSES = set(ALIPAY_STATUS_FAILED)

# Motivo registrado cuando Alipay cierra la transacción
ALIPAY_CLOSED_REASON = "payment closed"

__all__ = [
    "ALIPAY_STATUS_SUCCESS", "ALIPAY_STATUS_FAILED",
    "ALIPAY_SUCCESS_STATUSES", "ALIPAY_FAILED_STATUSES",
    "WECHAT_CODE_SUCCESS", "WECHAT_CODE_FAIL",
    "ALIPAY_CLOSED_REASON",
]
