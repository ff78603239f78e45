#!/usr/bin/env python3
"""
Build and sign an invoke transaction without touching the network.
"""
import json
import logging

from stark_account_sdk import Account, MemKeystore, StubProvider, verify

ACCOUNT_ADDRESS = "0x043784df59268c02b716e20bf77797bd96c68c2f100b2a634e448c35e3ad363e"
PRIVATE_KEY = "0x043b7fe9d91942c98cd5fd37579bd99ec74f879c4c79d886633eecae9dad35fa"
ETH_TOKEN = "0x049d36570d4e46f48e99674bd3fcc84644ddd6b96f7c741b1562b82f9e004dc7"


def main():
    """
    Sign a single ERC20 transfer against a stub goerli provider.

    The resulting hash and signature match the transaction accepted on
    goerli with the same inputs.
    """
    logging.basicConfig(level=logging.DEBUG)

    keystore = MemKeystore()
    keystore.put(ACCOUNT_ADDRESS, PRIVATE_KEY)

    provider = StubProvider(chain_id="SN_GOERLI")
    account = Account(provider, ACCOUNT_ADDRESS, ACCOUNT_ADDRESS, keystore)

    # transfer(recipient, amount_low, amount_high)
    calls = [(ETH_TOKEN, "transfer", [ETH_TOKEN, 1, 0])]
    tx = account.build_and_sign_invoke(calls, nonce=2, max_fee=0x574fbde6000)

    print(f"Transaction hash: {tx.transaction_hash.to_hex()}")
    print(json.dumps(tx.to_wire(), indent=2))

    public_key = keystore.public_key(ACCOUNT_ADDRESS)
    print(f"Signature valid: {verify(tx.transaction_hash, tx.signature, public_key)}")

    response = account.add_invoke_transaction(tx)
    print(f"Stub provider accepted {response.transaction_hash.to_hex()}")


if __name__ == "__main__":
    main()
