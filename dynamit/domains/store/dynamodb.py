"""DynamoDB store client built on boto3."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from dynamit.domains.store.attributes import item_to_json, key_attribute
from dynamit.domains.store.protocols import Item, TableDescription
from dynamit.domains.store.types import Cursor

if TYPE_CHECKING:
    from dynamit.shared.app.runtime import RuntimeConfig


class DynamoDBStore:
    """StoreClient implementation for Amazon DynamoDB (or a local endpoint).

    Credentials and region resolution are left to boto3's default chain; the
    explicit region, profile and endpoint only override it.
    """

    def __init__(
        self,
        region: str,
        *,
        profile: str | None = None,
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.region = region
        self.profile = profile
        self.endpoint_url = endpoint_url
        self._client = client
        self._attribute_types: dict[str, dict[str, str]] = {}

    @classmethod
    def from_runtime(cls, runtime: RuntimeConfig) -> DynamoDBStore:
        return cls(runtime.region, profile=runtime.profile, endpoint_url=runtime.endpoint_url)

    @property
    def client(self) -> Any:
        if self._client is None:
            import boto3

            session = boto3.session.Session(profile_name=self.profile, region_name=self.region)
            self._client = session.client("dynamodb", endpoint_url=self.endpoint_url)
        return self._client

    def list_tables(self, start_after: str | None = None) -> tuple[list[str], str | None]:
        kwargs: dict[str, Any] = {}
        if start_after:
            kwargs["ExclusiveStartTableName"] = start_after
        response = self.client.list_tables(**kwargs)
        return list(response.get("TableNames", [])), response.get("LastEvaluatedTableName")

    def scan(
        self,
        table: str,
        limit: int,
        start_key: Cursor | None = None,
    ) -> tuple[list[Item], Cursor | None]:
        kwargs: dict[str, Any] = {"TableName": table, "Limit": limit}
        if start_key is not None:
            kwargs["ExclusiveStartKey"] = dict(start_key)
        response = self.client.scan(**kwargs)
        items = [item_to_json(item) for item in response.get("Items", [])]
        return items, response.get("LastEvaluatedKey")

    def describe_table(self, table: str) -> TableDescription:
        response = self.client.describe_table(TableName=table)
        description = response.get("Table", {})
        partition_key = None
        sort_key = None
        for element in description.get("KeySchema", []):
            if element.get("KeyType") == "HASH":
                partition_key = element.get("AttributeName")
            elif element.get("KeyType") == "RANGE":
                sort_key = element.get("AttributeName")
        attribute_types = {
            definition["AttributeName"]: definition["AttributeType"]
            for definition in description.get("AttributeDefinitions", [])
        }
        self._attribute_types[table] = attribute_types
        return TableDescription(
            name=table,
            item_count=int(description.get("ItemCount", 0)),
            partition_key=partition_key,
            sort_key=sort_key,
            attribute_types=attribute_types,
        )

    def query(self, table: str, conditions: Sequence[tuple[str, str]]) -> list[Item]:
        if table not in self._attribute_types:
            self.describe_table(table)
        attribute_types = self._attribute_types.get(table, {})

        names: dict[str, str] = {}
        values: dict[str, dict[str, Any]] = {}
        clauses: list[str] = []
        for index, (name, value) in enumerate(conditions):
            names[f"#k{index}"] = name
            values[f":v{index}"] = key_attribute(value, attribute_types.get(name, "S"))
            clauses.append(f"#k{index} = :v{index}")

        response = self.client.query(
            TableName=table,
            KeyConditionExpression=" AND ".join(clauses),
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=values,
        )
        return [item_to_json(item) for item in response.get("Items", [])]
