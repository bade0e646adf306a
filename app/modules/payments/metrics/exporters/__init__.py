# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/__init__.py

Exportadores de métricas del módulo Payments.
"""
