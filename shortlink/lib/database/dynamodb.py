"""DynamoDB implementation of the link store.

Layout: links are partitioned by ``execution_id`` with ``code`` as the sort
key, and found by code through the ``code-index`` global secondary index.
A partition key that is not the code cannot guard uniqueness on its own, so
every link is written in one transaction together with a reservation item
whose partition key is derived from the code. The reservation put carries
``attribute_not_exists``; if it fails the whole transaction is cancelled.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

from .base import LinkStore, WriteCondition
from .models import Link


CODE_INDEX = "code-index"
RESERVATION_PREFIX = "reservation#"
ITEM_LINK = "link"
ITEM_RESERVATION = "reservation"


class DynamoDBLinkStore(LinkStore):
    """Partitioned DynamoDB store with a secondary index on code."""

    name = "dynamodb"

    def __init__(
        self,
        table_name: str,
        default_execution_id: str = "default",
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client=None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize DynamoDB store.

        Args:
            table_name: Name of the links table
            default_execution_id: Partition used for links without an owner
            region_name: AWS region
            endpoint_url: Optional endpoint override (e.g. DynamoDB Local)
            client: Optional pre-built boto3 DynamoDB client
            logger: Optional logger instance
        """
        self.table_name = table_name
        self.default_execution_id = default_execution_id
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or boto3.client(
            "dynamodb",
            region_name=region_name,
            endpoint_url=endpoint_url,
        )

    # boto3 is blocking; run calls off the event loop
    async def _call(self, method: str, **kwargs) -> Dict[str, Any]:
        return await asyncio.to_thread(getattr(self.client, method), **kwargs)

    def _link_item(self, link: Link) -> Dict[str, Any]:
        return {
            "execution_id": {"S": link.owner_execution_id or self.default_execution_id},
            "code": {"S": link.code},
            "item_type": {"S": ITEM_LINK},
            "long_url": {"S": link.long_url},
            "created_at": {"S": link.created_at.isoformat()},
        }

    def _reservation_item(self, link: Link) -> Dict[str, Any]:
        return {
            "execution_id": {"S": RESERVATION_PREFIX + link.code},
            "code": {"S": link.code},
            "item_type": {"S": ITEM_RESERVATION},
        }

    @staticmethod
    def _item_to_link(item: Dict[str, Any]) -> Link:
        return Link.from_dict({
            "code": item["code"]["S"],
            "long_url": item.get("long_url", {}).get("S", ""),
            "created_at": item.get("created_at", {}).get("S"),
            "owner_execution_id": item["execution_id"]["S"],
        })

    @staticmethod
    def _is_condition_failure(error: ClientError) -> bool:
        if error.response.get("Error", {}).get("Code") != "TransactionCanceledException":
            return False
        reasons = error.response.get("CancellationReasons") or []
        if reasons:
            return any(r.get("Code") == "ConditionalCheckFailed" for r in reasons)
        return "ConditionalCheckFailed" in error.response.get("Error", {}).get("Message", "")

    async def create_tables(self) -> None:
        self.logger.info(f"Creating DynamoDB table {self.table_name} if not exists...")
        try:
            await self._call(
                "create_table",
                TableName=self.table_name,
                BillingMode="PAY_PER_REQUEST",
                AttributeDefinitions=[
                    {"AttributeName": "execution_id", "AttributeType": "S"},
                    {"AttributeName": "code", "AttributeType": "S"},
                ],
                KeySchema=[
                    {"AttributeName": "execution_id", "KeyType": "HASH"},
                    {"AttributeName": "code", "KeyType": "RANGE"},
                ],
                GlobalSecondaryIndexes=[
                    {
                        "IndexName": CODE_INDEX,
                        "KeySchema": [{"AttributeName": "code", "KeyType": "HASH"}],
                        "Projection": {"ProjectionType": "ALL"},
                    }
                ],
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceInUseException":
                raise
            self.logger.info(f"Table {self.table_name} already exists")
            return

        waiter = self.client.get_waiter("table_exists")
        await asyncio.to_thread(waiter.wait, TableName=self.table_name)
        self.logger.info("Table creation completed successfully")

    async def put(
        self,
        link: Link,
        condition: WriteCondition = WriteCondition.MUST_BE_ABSENT,
    ) -> bool:
        reservation = {"TableName": self.table_name, "Item": self._reservation_item(link)}
        transact_items = [
            {"Put": reservation},
            {"Put": {"TableName": self.table_name, "Item": self._link_item(link)}},
        ]

        if condition is WriteCondition.MUST_BE_ABSENT:
            reservation["ConditionExpression"] = "attribute_not_exists(#pk)"
            reservation["ExpressionAttributeNames"] = {"#pk": "execution_id"}
        else:
            # The previous owner may live in another partition; its item goes
            # in the same transaction so a failed write leaves it in place.
            existing = await self.get_by_code(link.code)
            if existing and existing.owner_execution_id != (
                link.owner_execution_id or self.default_execution_id
            ):
                transact_items.append({
                    "Delete": {
                        "TableName": self.table_name,
                        "Key": {
                            "execution_id": {"S": existing.owner_execution_id},
                            "code": {"S": existing.code},
                        },
                    }
                })

        try:
            await self._call("transact_write_items", TransactItems=transact_items)
        except ClientError as e:
            if self._is_condition_failure(e):
                self.logger.debug(f"Code already exists: {link.code}")
                return False
            raise

        return True

    async def get_by_code(self, code: str) -> Optional[Link]:
        response = await self._call(
            "query",
            TableName=self.table_name,
            IndexName=CODE_INDEX,
            KeyConditionExpression="#code = :code",
            ExpressionAttributeNames={"#code": "code"},
            ExpressionAttributeValues={":code": {"S": code}},
        )

        for item in response.get("Items", []):
            if item.get("item_type", {}).get("S") == ITEM_LINK:
                return self._item_to_link(item)
        return None

    async def health_check(self) -> bool:
        try:
            await self._call("describe_table", TableName=self.table_name)
            return True
        except Exception as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        self.client.close()
