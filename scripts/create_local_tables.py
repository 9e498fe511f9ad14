#!/usr/bin/env python3
"""Create DynamoDB tables for local development.

This script creates the two DynamoDB tables the realtime layer needs, configured against
DynamoDB Local. It matches the SAM template schemas exactly.

Usage:
    python scripts/create_local_tables.py
"""

import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

# Add src to path for config import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tripsync.config import get_config
from tripsync.services.changes import TRIP_TABLE_INDEX


def create_connections_table(dynamodb, table_name: str):
    """Create the WebSocket connections table."""
    try:
        dynamodb.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "connectionId", "KeyType": "HASH"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "connectionId", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"✓ Created {table_name} table")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ {table_name} table already exists")
        else:
            raise


def create_subscriptions_table(dynamodb, table_name: str):
    """Create the channel subscriptions table with a GSI on trip id and watched table name."""
    try:
        dynamodb.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "connectionId", "KeyType": "HASH"},
                {"AttributeName": "channel", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "connectionId", "AttributeType": "S"},
                {"AttributeName": "channel", "AttributeType": "S"},
                {"AttributeName": "tripId", "AttributeType": "S"},
                {"AttributeName": "table", "AttributeType": "S"},
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": TRIP_TABLE_INDEX,
                    "KeySchema": [
                        {"AttributeName": "tripId", "KeyType": "HASH"},
                        {"AttributeName": "table", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"✓ Created {table_name} table with GSI")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ {table_name} table already exists")
        else:
            raise


def main():
    """Create all DynamoDB tables."""
    config = get_config()

    endpoint_url = config.dynamodb_endpoint or "http://localhost:8000"

    print(f"Creating DynamoDB tables at {endpoint_url}...")
    print()

    # For DynamoDB Local, use dummy credentials
    dynamodb = boto3.client(
        "dynamodb",
        endpoint_url=endpoint_url,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    create_connections_table(dynamodb, config.connections_table)
    create_subscriptions_table(dynamodb, config.subscriptions_table)

    print()
    print("✅ All DynamoDB tables ready")


if __name__ == "__main__":
    main()
