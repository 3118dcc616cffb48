#!/usr/bin/env python
"""
Basic Usage Example

Logs in with settings from the environment (ODOO_URL, ODOO_DB, ODOO_USERNAME,
ODOO_PASSWORD, ODOO_PROTOCOL) and walks through the record-set calls:
reading a field, creating, updating and deleting a partner.
"""

import asyncio
import logging
import sys

from odoo_rpc import AsyncClient, Client, ClientConfig, OdooRpcError, PresentOrAbsent


def setup_logging():
    """Setup logging configuration"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def run_sync(config: ClientConfig):
    print(f"\n=== Blocking client over {config.adapter_type} ===")

    with Client.from_config(config) as client:
        # A bare id and a one-element list select the same record
        name = client.env("res.partner").browse([1]).get("name", str)
        print(f"Partner 1 (list): {name}")
        name = client.env("res.partner").browse(1).get("name", str)
        print(f"Partner 1 (scalar): {name}")

        email = client.get("email", PresentOrAbsent[str])
        print(f"Partner 1 email: {email.get('<none>')}")

        client.create({"name": "odoo_rpc example"})
        print(f"Created {client}")

        client.write({"comment": "created by examples/basic_usage.py"})
        print(f"Updated {client}: {client.read(['name', 'comment'])}")

        client.unlink()
        print(f"Deleted, ids now {client.ids()}")

        companies = client.search_read([["is_company", "=", True]], ["name"])
        print(f"Companies: {companies}")


async def run_async(config: ClientConfig):
    print(f"\n=== Async client over {config.adapter_type} ===")

    async with await AsyncClient.from_config(config) as client:
        await client.env("res.partner").search([["is_company", "=", True]])
        print(f"Found {client}")
        if client.ids():
            print(f"First company: {await client.get('name', str)}")


def main():
    setup_logging()

    try:
        config = ClientConfig.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 1

    print(f"Configuration: {config.to_dict()}")

    try:
        run_sync(config)
        asyncio.run(run_async(config))
    except OdooRpcError as e:
        print(f"Request failed: {type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
