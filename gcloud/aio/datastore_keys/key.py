import logging
from typing import Any
from typing import Dict
from typing import Iterable
from typing import Optional
from typing import Tuple
from typing import Type
from typing import TYPE_CHECKING

from google.protobuf.message import DecodeError

from gcloud.aio.datastore_keys import key_pb
from gcloud.aio.datastore_keys.exceptions import IncompleteKey
from gcloud.aio.datastore_keys.exceptions import InvalidArgument
from gcloud.aio.datastore_keys.exceptions import InvalidEncoding
from gcloud.aio.datastore_keys.path_element import NameOrId
from gcloud.aio.datastore_keys.path_element import PathElement
from gcloud.aio.datastore_keys.utils import ensure_utf8
from gcloud.aio.datastore_keys.utils import percent_decode
from gcloud.aio.datastore_keys.utils import percent_encode

if TYPE_CHECKING:
    from gcloud.aio.datastore_keys.builder import KeyBuilder  # pylint: disable=cyclic-import


log = logging.getLogger(__name__)


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/Key
class PartialKey:
    """
    A dataset, an optional namespace and a non-empty path of elements.

    Every element but the last must have an id or a name; the last may still
    be waiting for one (see `Key` for keys where it never is). Instances are
    immutable, so they may be shared and hashed freely. Use `builder()` to
    derive new keys.
    """
    path_element_kind = PathElement

    def __init__(self, dataset: str, path: Iterable[PathElement],
                 namespace: Optional[str] = None) -> None:
        if not isinstance(dataset, str) or not dataset:
            raise InvalidArgument(
                f'dataset must be a non-empty str: {dataset!r}')
        if namespace is not None and not isinstance(namespace, str):
            raise InvalidArgument(f'namespace must be a str: {namespace!r}')
        ensure_utf8(dataset, 'dataset')
        if namespace is not None:
            ensure_utf8(namespace, 'namespace')

        path = tuple(path)
        if not path:
            raise InvalidArgument('path must contain at least one element')
        for element in path[:-1]:
            if not element.is_complete():
                raise InvalidArgument(
                    f'ancestor {element!r} has neither an id nor a name')

        self._dataset = dataset
        # an empty namespace and an absent one address the same partition
        self._namespace = namespace or None
        self._path: Tuple[PathElement, ...] = path

    @property
    def dataset(self) -> str:
        return self._dataset

    @property
    def namespace(self) -> Optional[str]:
        return self._namespace

    @property
    def path(self) -> Tuple[PathElement, ...]:
        return self._path

    @property
    def ancestors(self) -> Tuple[PathElement, ...]:
        return self._path[:-1]

    @property
    def leaf(self) -> PathElement:
        return self._path[-1]

    @property
    def kind(self) -> str:
        return self.leaf.kind

    def is_complete(self) -> bool:
        return self.leaf.is_complete()

    def parent(self) -> Optional['Key']:
        if not self.ancestors:
            return None
        return Key(self._dataset, self.ancestors, self._namespace)

    def to_builder(self) -> 'KeyBuilder':
        # pylint: disable=import-outside-toplevel,cyclic-import
        from gcloud.aio.datastore_keys.builder import KeyBuilder
        return KeyBuilder.from_key(self)

    @classmethod
    def builder(cls, dataset: Optional[str], kind: str, *,
                parent: Optional['Key'] = None) -> 'KeyBuilder':
        """
        Start a key whose last element has no identity yet; finish it with
        `build_partial()`.
        """
        # pylint: disable=import-outside-toplevel,cyclic-import
        from gcloud.aio.datastore_keys.builder import KeyBuilder
        if parent is not None:
            return KeyBuilder.child_of(parent, kind, dataset=dataset)
        return KeyBuilder(dataset, kind)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PartialKey):
            return False

        return bool(self._dataset == other._dataset
                    and self._namespace == other._namespace
                    and self._path == other._path)

    def __hash__(self) -> int:
        return hash((self._dataset, self._namespace, self._path))

    def __repr__(self) -> str:
        return str(self.to_repr())

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'PartialKey':
        try:
            partition_id = data['partitionId']
            dataset = partition_id['projectId']
            namespace = partition_id.get('namespaceId')
            path = data['path']
        except (AttributeError, KeyError, TypeError) as e:
            raise InvalidArgument(f'invalid key {data!r}') from e

        return cls(dataset,
                   path=[cls.path_element_kind.from_repr(p) for p in path],
                   namespace=namespace)

    def to_repr(self) -> Dict[str, Any]:
        partition_id = {'projectId': self._dataset}
        if self._namespace is not None:
            partition_id['namespaceId'] = self._namespace

        return {
            'partitionId': partition_id,
            'path': [p.to_repr() for p in self._path],
        }

    @classmethod
    def from_pb(cls, pb: Any) -> 'PartialKey':
        namespace = (pb.partition_id.namespace
                     if pb.partition_id.HasField('namespace') else None)
        return cls(pb.partition_id.dataset_id,
                   path=[cls.path_element_kind.from_pb(p)
                         for p in pb.path_element],
                   namespace=namespace)

    def to_pb(self) -> Any:
        pb = key_pb.Key()
        pb.partition_id.dataset_id = self._dataset
        if self._namespace is not None:
            pb.partition_id.namespace = self._namespace
        for element in self._path:
            pb.path_element.add().CopyFrom(element.to_pb())
        return pb

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PartialKey':
        return cls.from_pb(parse_pb(data))

    def to_bytes(self) -> bytes:
        return self.to_pb().SerializeToString(deterministic=True)


class Key(PartialKey):
    """
    A key whose last path element always has an id or a name, ie. one which
    can address a stored entity.
    """

    def __init__(self, dataset: str, path: Iterable[PathElement],
                 namespace: Optional[str] = None) -> None:
        super().__init__(dataset, path, namespace)
        if not self.leaf.is_complete():
            raise IncompleteKey(
                f'{self.leaf!r} has neither an id nor a name; use a '
                'PartialKey for keys awaiting an allocated id')

    def has_id(self) -> bool:
        return self.leaf.has_id()

    @property
    def id(self) -> Optional[int]:
        """The key's id, or None if it has a name instead."""
        return self.leaf.id

    def has_name(self) -> bool:
        return self.leaf.has_name()

    @property
    def name(self) -> Optional[str]:
        """The key's name, or None if it has an id instead."""
        return self.leaf.name

    @property
    def name_or_id(self) -> NameOrId:
        return self.leaf.name_or_id  # type: ignore[return-value]

    @classmethod
    def builder(cls, dataset: Optional[str], kind: str,  # type: ignore[override]
                name_or_id: NameOrId, *,
                parent: Optional['Key'] = None) -> 'KeyBuilder':
        """
        Start building a key of the given kind.

        When `parent` is given the new key inherits its dataset and namespace
        and nests below it: the parent's own path becomes the new key's
        ancestors. `dataset` may then be left as None.
        """
        # pylint: disable=import-outside-toplevel,cyclic-import
        from gcloud.aio.datastore_keys.builder import KeyBuilder
        if parent is not None:
            return KeyBuilder.child_of(parent, kind, name_or_id,
                                       dataset=dataset)
        return KeyBuilder(dataset, kind, name_or_id)

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'Key':
        return into_key(super().from_repr(data), cls)

    @classmethod
    def from_pb(cls, pb: Any) -> 'Key':
        return into_key(super().from_pb(pb), cls)

    def to_url_safe(self) -> str:
        """Encode the key for use as part of a URL."""
        return percent_encode(self.to_bytes())

    @classmethod
    def from_url_safe(cls, url_safe: str) -> 'Key':
        """
        Decode a key produced by `to_url_safe()`.

        Raises `InvalidEncoding` if the text is not a valid encoding,
        `InvalidArgument` if it decodes to a structurally invalid key and
        `IncompleteKey` if the decoded key has no terminal id or name.
        """
        return cls.from_bytes(percent_decode(url_safe))


def into_key(key: PartialKey, key_kind: Type[Key] = Key) -> Key:
    """Refine a PartialKey into a Key, failing if its leaf is incomplete."""
    if isinstance(key, key_kind):
        return key

    if not key.is_complete():
        raise IncompleteKey(f'key {key!r} is not complete')

    return key_kind(key.dataset, key.path, key.namespace)


def parse_pb(data: bytes) -> Any:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidEncoding(
            f'binary key must be bytes, not {type(data).__name__}')

    try:
        pb = key_pb.Key.FromString(bytes(data))
    except (DecodeError, UnicodeDecodeError) as e:
        log.debug('could not parse key from %d bytes: %s', len(data), e)
        raise InvalidEncoding('could not parse key') from e

    if not pb.IsInitialized():
        log.debug('parsed key is missing required fields: %s',
                  pb.FindInitializationErrors())
        raise InvalidEncoding('could not parse key: missing required fields')

    # proto2 strings are not checked on parse: upb hands back bytes for
    # invalid utf-8 where the pure-python runtime raises on access
    try:
        strings = [pb.partition_id.dataset_id, pb.partition_id.namespace]
        for element in pb.path_element:
            strings.extend((element.kind, element.name))
    except UnicodeDecodeError as e:
        log.debug('parsed key contains invalid utf-8: %s', e)
        raise InvalidEncoding('could not parse key: invalid utf-8') from e

    if any(isinstance(s, bytes) for s in strings):
        log.debug('parsed key contains invalid utf-8: %r', strings)
        raise InvalidEncoding('could not parse key: invalid utf-8')

    return pb
