#!/usr/bin/env python3
"""
Submit an invoke transaction to a network from networks.json.

Environment:
    ACCOUNT_ADDRESS  Deployed account contract address
    PRIVATE_KEY      Account signing key
    ACCOUNT_NONCE    Current account nonce
    NETWORK          Network name (default: sepolia)
    <NETWORK>_RPC_URL  Optional endpoint override, e.g. SEPOLIA_RPC_URL
"""
import logging
import os

from stark_account_sdk import (
    Account,
    MemKeystore,
    NetworkConfig,
    RpcProvider,
    StarkAccountError,
    SubmissionRejected,
)

ETH_TOKEN = "0x049d36570d4e46f48e99674bd3fcc84644ddd6b96f7c741b1562b82f9e004dc7"


def main():
    logging.basicConfig(level=logging.INFO)

    address = os.environ.get("ACCOUNT_ADDRESS")
    private_key = os.environ.get("PRIVATE_KEY")
    if not address or not private_key:
        print("ERROR: ACCOUNT_ADDRESS and PRIVATE_KEY environment variables are required")
        return

    network = os.environ.get("NETWORK", "sepolia")
    nonce = int(os.environ.get("ACCOUNT_NONCE", "0"))

    print("Available networks:")
    for network_name in NetworkConfig.load_networks():
        print(f"  - {network_name}")

    keystore = MemKeystore()
    keystore.put(address, private_key)

    with RpcProvider(NetworkConfig.get_rpc_url(network)) as provider:
        account = Account(provider, address, address, keystore)
        print(f"Connected to chain {provider.chain_id()}")

        calls = [(ETH_TOKEN, "transfer", [address, 1, 0])]
        try:
            response = account.execute(calls, nonce=nonce, max_fee=10**15)
        except SubmissionRejected as e:
            print(f"Rejected ({e.category.value}): {e.raw_message}")
            return
        except StarkAccountError as e:
            print(f"Failed: {e}")
            return

        print(f"Submitted: {response.transaction_hash.to_hex()}")


if __name__ == "__main__":
    main()
