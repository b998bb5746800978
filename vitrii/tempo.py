# -*- coding: utf-8 -*-
"""
Datas são gravadas em UTC sem fuso (naive), como o SQLite as devolve.
"""

from datetime import datetime, timezone


def agora() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def para_utc(valor: datetime) -> datetime:
    """Converte um datetime com fuso para UTC naive; naive é tratado como UTC."""
    if valor.tzinfo is None:
        return valor
    return valor.astimezone(timezone.utc).replace(tzinfo=None)
