from __future__ import annotations

import json
from decimal import Decimal
from typing import Optional

from ..common.validators import validate_policy
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayPolicy
from .repository import PolicyRepository


class MySQLPolicyRepository(PolicyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_organization(self, organization_id: str) -> Optional[PayPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT settings_json FROM pay_policies WHERE organization_id=%s",
                (organization_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            raw = r["settings_json"]
            settings = json.loads(raw) if isinstance(raw, (str, bytes, bytearray)) else raw
            return PayPolicy.from_settings(settings)

    def save(self, organization_id: str, policy: PayPolicy) -> None:
        validate_policy(policy)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO pay_policies(organization_id, settings_json)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE settings_json=VALUES(settings_json)
                """,
                (organization_id, json.dumps(policy.to_settings())),
            )

    def get_member_transport(self, organization_id: str) -> dict[str, Decimal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, per_day_amount FROM member_transport WHERE organization_id=%s",
                (organization_id,),
            )
            return {str(r["employee_id"]): Decimal(str(r["per_day_amount"])) for r in fetchall(cur)}
