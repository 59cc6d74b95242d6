from .base import ByteStorage, DuplicateRecord, JobQueue, MetadataStore, SessionStore
from .blobs import LocalByteStorage
from .metadata import SqlMetadataStore
from .queue import RedisJobQueue
from .sessions import RedisSessionStore

__all__ = [
    'ByteStorage', 'DuplicateRecord', 'JobQueue', 'MetadataStore', 'SessionStore',
    'LocalByteStorage', 'SqlMetadataStore', 'RedisJobQueue', 'RedisSessionStore',
]
