"""Repository management for Shale."""

from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_BRANCH, DEFAULT_META_DIR, Config
from .errors import IOFailure, ShaleError
from .objects import ShaleObject
from .store import ObjectStore


class Repository:
    """
    Represents a Shale repository.
    
    A repository is a working tree root plus its metadata directory. It
    holds no object state in memory; every object lives in the object
    store on disk.
    """
    
    def __init__(self, path: Union[str, Path] = '.', meta_dir_name: Optional[str] = None):
        """
        Initialize repository.
        
        Args:
            path: Path to repository root (defaults to current directory)
            meta_dir_name: Metadata directory name; core.metadir from the
                environment or global config, else '.git'
        """
        if meta_dir_name is None:
            meta_dir_name = Config().get('core', 'metadir', DEFAULT_META_DIR)
        self.work_tree = Path(path).resolve()
        self.meta_dir = self.work_tree / meta_dir_name
        self.objects_dir = self.meta_dir / 'objects'
        self.refs_dir = self.meta_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.tags_dir = self.refs_dir / 'tags'
        self.head_file = self.meta_dir / 'HEAD'
        self.config_file = self.meta_dir / 'config'
        
        self._config = None
        self._store = None
    
    @property
    def config(self) -> Config:
        """Get Config instance for this repository."""
        if self._config is None:
            self._config = Config(self.config_file)
        return self._config
    
    @property
    def objects(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._store is None:
            self._store = ObjectStore(self.objects_dir, self.config.compression_level)
        return self._store
    
    def init(self, default_branch: Optional[str] = None) -> 'Repository':
        """
        Initialize a new repository.
        
        Creates the metadata directory structure:
        <metadir>/
        ├── objects/       # Object database
        ├── refs/
        │   ├── heads/     # Branch references
        │   └── tags/      # Tag references
        ├── HEAD           # Default branch pointer
        └── config         # Repository configuration
        
        Returns:
            Repository: self for method chaining
            
        Raises:
            ShaleError: If repository already exists
            IOFailure: If a directory or file cannot be created
        """
        if self.meta_dir.exists():
            raise ShaleError(f"Repository already exists at {self.meta_dir}")
        
        if default_branch is None:
            default_branch = self.config.get('init', 'defaultbranch', DEFAULT_BRANCH)
        
        try:
            self.work_tree.mkdir(parents=True, exist_ok=True)
            self.meta_dir.mkdir()
            self.objects_dir.mkdir()
            self.refs_dir.mkdir()
            self.heads_dir.mkdir()
            self.tags_dir.mkdir()
            self.head_file.write_text(f'ref: refs/heads/{default_branch}\n')
        except OSError as e:
            raise IOFailure(e.filename or self.meta_dir, 'initialize repository', e.strerror) from e
        
        self.config.set('core', 'repositoryformatversion', '0')
        return self
    
    @classmethod
    def find_repository(cls, path: Union[str, Path] = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.
        
        Searches from the given path upwards until it finds a metadata
        directory or reaches the filesystem root.
        
        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()
        meta_dir_name = Config().get('core', 'metadir', DEFAULT_META_DIR)
        
        while True:
            if (current / meta_dir_name).is_dir():
                return cls(current, meta_dir_name)
            
            # Reached filesystem root
            if current == current.parent:
                return None
            
            current = current.parent
    
    def object_path(self, hash: str) -> Path:
        return self.objects.object_path(hash)
    
    def write_object(self, obj: ShaleObject) -> str:
        """Write object to the object store and return its hash."""
        return self.objects.write(obj)
    
    def read_object(self, hash: str) -> ShaleObject:
        """Read object by hash. See ObjectStore.read for failures."""
        return self.objects.read(hash)
    
    def object_exists(self, hash: str) -> bool:
        return self.objects.exists(hash)
    
    def resolve_object(self, name: str) -> Optional[str]:
        """Resolve a full or abbreviated object name to a full hash."""
        return self.objects.resolve_prefix(name)
    
    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
