"""
Key storage for account signing keys.

A keystore maps identifiers (usually an account address or public key in
hex) to private keys. Keys never leave the keystore: callers ask it to
sign, and there is no read path for the raw key material.
"""
import base64
import json
import logging
import os
import stat
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Union

import nacl.exceptions
import nacl.secret
import portalocker

from .crypto.constants import EC_ORDER
from .crypto.signature import private_to_stark_key, sign
from .exceptions import InvalidFieldEncoding, InvalidKeyRange, KeyNotFound, KeystoreCorrupted
from .felt import FeltLike, FieldElement
from .models import Signature

logger = logging.getLogger(__name__)

PrivateKeyLike = Union[int, FieldElement, str]


def _normalise_key(private_key: PrivateKeyLike) -> int:
    if isinstance(private_key, FieldElement):
        private_key = private_key.value
    elif isinstance(private_key, str):
        try:
            private_key = FieldElement.from_string(private_key).value
        except InvalidFieldEncoding:
            raise InvalidKeyRange("Private key literal is not a valid hex or decimal integer") from None
    if isinstance(private_key, bool) or not isinstance(private_key, int):
        raise InvalidKeyRange(f"Private key must be an integer, got {type(private_key).__name__}")
    if not 1 <= private_key < EC_ORDER:
        raise InvalidKeyRange("Private key must be in the range [1, EC_ORDER)")
    return private_key


class Keystore(ABC):
    """Interface shared by keystore implementations."""

    @abstractmethod
    def put(self, identifier: str, private_key: PrivateKeyLike) -> None:
        """
        Store a key, replacing any existing key for the identifier.

        Raises:
            InvalidKeyRange: If the key is not in [1, EC_ORDER)
        """
        pass

    @abstractmethod
    def _load(self, identifier: str) -> int:
        """Return the key for identifier or raise KeyNotFound."""
        pass

    @abstractmethod
    def delete(self, identifier: str) -> None:
        pass

    @abstractmethod
    def identifiers(self) -> List[str]:
        pass

    def __contains__(self, identifier: str) -> bool:
        return identifier in self.identifiers()

    def sign(self, identifier: str, message_hash: FeltLike) -> Signature:
        """
        Sign a message hash with the key registered for identifier.

        Raises:
            KeyNotFound: If no key is registered for the identifier
            InvalidHashRange: If the hash cannot be signed
        """
        private_key = self._load(identifier)
        return sign(message_hash, private_key)

    def public_key(self, identifier: str) -> FieldElement:
        """Return the Stark public key derived from the stored key."""
        return private_to_stark_key(self._load(identifier))


class MemKeystore(Keystore):
    """Thread-safe in-memory keystore"""

    def __init__(self):
        self._keys: Dict[str, int] = {}
        self._lock = threading.RLock()

    def put(self, identifier: str, private_key: PrivateKeyLike) -> None:
        key = _normalise_key(private_key)
        with self._lock:
            self._keys[identifier] = key
        logger.debug("Stored key for %s", identifier[:10])

    def _load(self, identifier: str) -> int:
        with self._lock:
            try:
                return self._keys[identifier]
            except KeyError:
                raise KeyNotFound(identifier) from None

    def delete(self, identifier: str) -> None:
        with self._lock:
            self._keys.pop(identifier, None)

    def identifiers(self) -> List[str]:
        with self._lock:
            return list(self._keys)


class FileKeystore(Keystore):
    """
    Thread-safe and process-safe keystore persisted to an encrypted JSON file.

    Each key is sealed with a libsodium SecretBox under the master key given
    at construction. File access is serialised with a lock file.
    """

    STORE_VERSION = 1

    def __init__(self, store_path: Union[str, Path], master_key: bytes, lock_timeout: int = 10):
        """
        Initialize the file keystore.

        Args:
            store_path: Path of the JSON store file
            master_key: 32-byte secret used to encrypt stored keys
            lock_timeout: Seconds to wait for the file lock

        Raises:
            ValueError: If the master key has the wrong length
        """
        if not isinstance(master_key, bytes) or len(master_key) != nacl.secret.SecretBox.KEY_SIZE:
            raise ValueError(f"Master key must be {nacl.secret.SecretBox.KEY_SIZE} bytes")
        self.store_path = Path(store_path)
        self.lock_timeout = lock_timeout
        self._box = nacl.secret.SecretBox(master_key)
        self._thread_lock = threading.RLock()
        self._ensure_store()

    def _ensure_store(self) -> None:
        directory = self.store_path.parent
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            if os.name == 'posix':
                os.chmod(directory, stat.S_IRUSR | stat.S_IWUSR | stat.S_IXUSR)  # 0700

        if not self.store_path.exists():
            self._write({"version": self.STORE_VERSION, "keys": {}})

        if os.name == 'posix':
            os.chmod(self.store_path, stat.S_IRUSR | stat.S_IWUSR)  # 0600

    def _lock_path(self) -> str:
        return str(self.store_path) + '.lock'

    def _read(self) -> Dict:
        with open(self.store_path, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                logger.error("Key store %s is corrupt: %s", self.store_path, e)
                raise KeystoreCorrupted(f"Key store {self.store_path} is not valid JSON: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("keys"), dict):
            raise KeystoreCorrupted(f"Key store {self.store_path} has no key table")
        return data

    def _write(self, data: Dict) -> None:
        # Written to a sibling file and swapped in, so readers never see a torn store
        fd, tmp_path = tempfile.mkstemp(
            dir=self.store_path.parent, prefix=self.store_path.name + '.', suffix='.tmp'
        )
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            if os.name == 'posix':
                os.chmod(tmp_path, stat.S_IRUSR | stat.S_IWUSR)  # 0600
            os.replace(tmp_path, self.store_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _update(self, mutate) -> None:
        with self._thread_lock, portalocker.Lock(self._lock_path(), timeout=self.lock_timeout):
            data = self._read()
            mutate(data["keys"])
            self._write(data)

    def put(self, identifier: str, private_key: PrivateKeyLike) -> None:
        key = _normalise_key(private_key)
        sealed = self._box.encrypt(key.to_bytes(32, "big"))
        entry = {"encrypted": base64.b64encode(sealed).decode("ascii")}
        self._update(lambda keys: keys.__setitem__(identifier, entry))
        logger.debug("Stored encrypted key for %s", identifier[:10])

    def _load(self, identifier: str) -> int:
        with self._thread_lock, portalocker.Lock(self._lock_path(), timeout=self.lock_timeout):
            entry = self._read()["keys"].get(identifier)
        if entry is None:
            raise KeyNotFound(identifier)
        try:
            raw = self._box.decrypt(base64.b64decode(entry["encrypted"]))
        except (nacl.exceptions.CryptoError, KeyError, ValueError) as e:
            raise ValueError(f"Failed to decrypt key for {identifier!r}: {e}") from e
        return int.from_bytes(raw, "big")

    def delete(self, identifier: str) -> None:
        self._update(lambda keys: keys.pop(identifier, None))

    def identifiers(self) -> List[str]:
        with self._thread_lock, portalocker.Lock(self._lock_path(), timeout=self.lock_timeout):
            return list(self._read()["keys"])
