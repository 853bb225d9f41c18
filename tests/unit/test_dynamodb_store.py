"""Tests for the boto3-backed store client and attribute conversion."""

from __future__ import annotations

import boto3
import pytest
from botocore.stub import Stubber

from dynamit.domains.store.attributes import attribute_to_json, item_to_json, key_attribute
from dynamit.domains.store.client import FetchClient
from dynamit.domains.store.dynamodb import DynamoDBStore


@pytest.fixture
def stubbed():
    client = boto3.client(
        "dynamodb",
        region_name="eu-west-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    with Stubber(client) as stubber:
        yield DynamoDBStore("eu-west-1", client=client), stubber
        stubber.assert_no_pending_responses()


def _describe(table: str, *keys: tuple[str, str, str], count: int = 0) -> dict:
    return {
        "Table": {
            "TableName": table,
            "KeySchema": [{"AttributeName": name, "KeyType": kind} for name, kind, _ in keys],
            "AttributeDefinitions": [{"AttributeName": name, "AttributeType": kind} for name, _, kind in keys],
            "ItemCount": count,
        }
    }


class TestAttributes:
    def test_scalars(self):
        assert attribute_to_json({"S": "x"}) == "x"
        assert attribute_to_json({"N": "42"}) == 42
        assert attribute_to_json({"N": "1.5"}) == 1.5
        assert attribute_to_json({"BOOL": True}) is True
        assert attribute_to_json({"NULL": True}) is None

    def test_collections(self):
        item = {
            "m": {"M": {"n": {"N": "1"}, "l": {"L": [{"S": "a"}, {"N": "2"}]}}},
            "ss": {"SS": ["b", "a"]},
            "ns": {"NS": ["3", "1"]},
        }
        assert item_to_json(item) == {"m": {"n": 1, "l": ["a", 2]}, "ss": ["a", "b"], "ns": [1, 3]}

    def test_binary_is_base64(self):
        assert attribute_to_json({"B": b"hi"}) == "aGk="

    def test_key_attribute_uses_declared_type(self):
        assert key_attribute("7", "N") == {"N": "7"}
        assert key_attribute("7", "S") == {"S": "7"}
        assert key_attribute("hi", "B") == {"B": b"hi"}


class TestDynamoDBStore:
    def test_list_tables_pages(self, stubbed):
        store, stubber = stubbed
        stubber.add_response("list_tables", {"TableNames": ["a", "b"], "LastEvaluatedTableName": "b"}, {})
        stubber.add_response("list_tables", {"TableNames": ["c"]}, {"ExclusiveStartTableName": "b"})
        assert FetchClient(store).list_collections() == ["a", "b", "c"]

    def test_scan_forwards_cursor(self, stubbed):
        store, stubber = stubbed
        cursor = {"id": {"S": "k1"}}
        stubber.add_response(
            "scan",
            {"Items": [{"id": {"S": "k2"}, "n": {"N": "5"}}]},
            {"TableName": "users", "Limit": 10, "ExclusiveStartKey": cursor},
        )
        page = FetchClient(store, page_size=10).scan_page("users", cursor)
        assert page.items == ('{"id": "k2", "n": 5}',)
        assert page.has_more is False

    def test_scan_returns_last_evaluated_key(self, stubbed):
        store, stubber = stubbed
        stubber.add_response(
            "scan",
            {"Items": [{"id": {"S": "k1"}}], "LastEvaluatedKey": {"id": {"S": "k1"}}},
            {"TableName": "users", "Limit": 1},
        )
        page = FetchClient(store, page_size=1).scan_page("users")
        assert page.next_cursor == {"id": {"S": "k1"}}

    def test_describe_table(self, stubbed):
        store, stubber = stubbed
        stubber.add_response(
            "describe_table",
            _describe("orders", ("customer", "HASH", "S"), ("order_id", "RANGE", "N"), count=12),
            {"TableName": "orders"},
        )
        description = store.describe_table("orders")
        assert description.partition_key == "customer"
        assert description.sort_key == "order_id"
        assert description.item_count == 12
        assert description.attribute_types == {"customer": "S", "order_id": "N"}

    def test_query_types_key_values(self, stubbed):
        store, stubber = stubbed
        stubber.add_response(
            "describe_table",
            _describe("orders", ("customer", "HASH", "S"), ("order_id", "RANGE", "N")),
            {"TableName": "orders"},
        )
        stubber.add_response(
            "query",
            {"Items": [{"customer": {"S": "c1"}, "order_id": {"N": "7"}}]},
            {
                "TableName": "orders",
                "KeyConditionExpression": "#k0 = :v0 AND #k1 = :v1",
                "ExpressionAttributeNames": {"#k0": "customer", "#k1": "order_id"},
                "ExpressionAttributeValues": {":v0": {"S": "c1"}, ":v1": {"N": "7"}},
            },
        )
        records = FetchClient(store).query_by_key("orders", "customer", "c1", "order_id", "7")
        assert records == ['{"customer": "c1", "order_id": 7}']

    def test_client_error_collapses(self, stubbed):
        store, stubber = stubbed
        stubber.add_client_error("describe_table", service_error_code="ResourceNotFoundException")
        assert FetchClient(store).approximate_count("missing") == 0
