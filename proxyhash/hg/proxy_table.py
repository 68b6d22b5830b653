"""Store and resolve proxy hashes through a shared key/value store.

store_proxy_hash only stages a write: the proxy hash must not be embedded in other
durable state until the caller has flushed the batch.
"""

import logging
from typing import Iterable, List

from proxyhash.errors import CorruptProxyRecordError, MalformedRecordError, ProxyHashNotFoundError
from proxyhash.hg.proxy_record import ProxyRecord, derive_key, serialize
from proxyhash.model.hash import Hash
from proxyhash.model.paths import PathLike
from proxyhash.store.base import KeySpace, KeyValueStore, WriteBatch

log = logging.getLogger(__name__)


def store_proxy_hash(path: PathLike, rev_hash: Hash, batch: WriteBatch) -> Hash:
    """Stage (path, rev_hash) in batch and return its proxy hash. Errors from put propagate."""
    key = derive_key(path, rev_hash)
    batch.put(KeySpace.HG_PROXY_HASH, key.raw, serialize(path, rev_hash))
    log.debug("staged proxy hash %s for rev %s", key, rev_hash)
    return key


def _decode(key: Hash, value: bytes, context: str) -> ProxyRecord:
    try:
        return ProxyRecord.from_bytes(value)
    except MalformedRecordError as e:
        log.error("Corrupt proxy record %s (context: %s): %s", key, context, e)
        raise CorruptProxyRecordError(key, context, str(e)) from e


def load_proxy_hash(store: KeyValueStore, key: Hash, context: str) -> ProxyRecord:
    """
    Resolve key to its (path, rev_hash) record.
    context is a diagnostic label for the call site; it does not affect the lookup.
    Raises ProxyHashNotFoundError if absent, CorruptProxyRecordError if undecodable.
    """
    value = store.get(KeySpace.HG_PROXY_HASH, key.raw)
    if value is None:
        log.warning("Proxy hash %s not found (context: %s)", key, context)
        raise ProxyHashNotFoundError(key, context)
    return _decode(key, value, context)


def load_proxy_hashes(store: KeyValueStore, keys: Iterable[Hash], context: str) -> List[ProxyRecord]:
    """Resolve many keys with one store read; results follow the order of keys."""
    keys = list(keys)
    values = store.get_batch(KeySpace.HG_PROXY_HASH, [key.raw for key in keys])
    records = []
    for key, value in zip(keys, values):
        if value is None:
            log.warning("Proxy hash %s not found (context: %s)", key, context)
            raise ProxyHashNotFoundError(key, context)
        records.append(_decode(key, value, context))
    log.debug("loaded %d proxy hashes (context: %s)", len(records), context)
    return records
