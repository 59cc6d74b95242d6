from config.database import Base
from .user import User
from .file import FileModel
from .schemas import EntryCreate, FileEntry, FileKind, UserCreate, UserRecord

__all__ = [
    'Base', 'User', 'FileModel',
    'EntryCreate', 'FileEntry', 'FileKind', 'UserCreate', 'UserRecord',
]
