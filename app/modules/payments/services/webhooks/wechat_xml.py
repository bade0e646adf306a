# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/wechat_xml.py

Codec XML de WeChat Pay v2.

WeChat envía callbacks como un documento <xml> plano:

    <xml>
      <return_code><![CDATA[SUCCESS]]></return_code>
      <total_fee>1</total_fee>
    </xml>

Los hijos pueden venir en CDATA o como texto plano. Se rechazan documentos
con DOCTYPE/ENTITY (expansión de entidades en input no confiable).

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, Mapping, Union

logger = logging.getLogger(__name__)

ROOT_TAG = "xml"

_FORBIDDEN_DECLARATIONS = re.compile(r"<!\s*(DOCTYPE|ENTITY)", re.IGNORECASE)


class WechatXmlError(ValueError):
    """Body XML de WeChat malformado."""
    pass


def parse_wechat_xml(body: Union[str, bytes]) -> Dict[str, str]:
    """
    Convierte el body XML de WeChat en un mapping plano str -> str.

    Raises:
        WechatXmlError: XML malformado, raíz distinta de <xml> o con DTD
    """
    if isinstance(body, bytes):
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WechatXmlError("El body no es UTF-8 válido") from e
    else:
        text = body

    if not text or not text.strip():
        raise WechatXmlError("Body XML vacío")

    if _FORBIDDEN_DECLARATIONS.search(text):
        raise WechatXmlError("DOCTYPE/ENTITY no permitidos en callbacks")

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise WechatXmlError(f"XML malformado: {e}") from e

    if root.tag != ROOT_TAG:
        raise WechatXmlError(f"Raíz XML inesperada: <{root.tag}>")

    fields: Dict[str, str] = {}
    for child in root:
        fields[child.tag] = child.text or ""
    return fields


def _cdata(value: str) -> str:
    # "]]>" dentro del valor cerraría el bloque CDATA
    return "<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def render_wechat_xml(fields: Mapping[str, Any]) -> str:
    """Serializa un mapping plano como <xml> con valores en CDATA (omite None)."""
    parts = ["<xml>"]
    for key, value in fields.items():
        if value is None:
            continue
        parts.append(f"<{key}>{_cdata(str(value))}</{key}>")
    parts.append("</xml>")
    return "".join(parts)


def build_wechat_ack(success: bool, message: str = "OK") -> str:
    """Respuesta que WeChat espera como acuse de un callback."""
    return render_wechat_xml({
        "return_code": "SUCCESS" if success else "FAIL",
        "return_msg": "OK" if success else message,
    })


__all__ = [
    "WechatXmlError",
    "parse_wechat_xml",
    "render_wechat_xml",
    "build_wechat_ack",
]

# Fin del archivo backend/app/modules/payments/services/webhooks/wechat_xml.py
