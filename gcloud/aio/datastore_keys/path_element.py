from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

from gcloud.aio.datastore_keys import key_pb
from gcloud.aio.datastore_keys.constants import IdentityType
from gcloud.aio.datastore_keys.constants import MAX_ID
from gcloud.aio.datastore_keys.constants import MIN_ID
from gcloud.aio.datastore_keys.exceptions import InvalidArgument
from gcloud.aio.datastore_keys.utils import ensure_utf8


NameOrId = Union[int, str]


class Identity:
    """
    The identity of a path element: exactly one of an id or a name, or
    neither while the element is still waiting for the server to assign one.
    """

    def __init__(self, type_: IdentityType = IdentityType.UNSET,
                 value: Optional[NameOrId] = None) -> None:
        if type_ == IdentityType.ID:
            # bool is an int subclass but never a valid id
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidArgument(f'id must be an int, not {value!r}')
            if not MIN_ID <= value <= MAX_ID:
                raise InvalidArgument(f'id {value} does not fit in int64')
        elif type_ == IdentityType.NAME:
            if not isinstance(value, str):
                raise InvalidArgument(f'name must be a str, not {value!r}')
            if not value:
                raise InvalidArgument('name must not be empty')
            ensure_utf8(value, 'name')
        elif value is not None:
            raise InvalidArgument(f'unset identity cannot carry {value!r}')

        self._type = type_
        self._value = value

    @classmethod
    def of_id(cls, id_: int) -> 'Identity':
        return cls(IdentityType.ID, id_)

    @classmethod
    def of_name(cls, name: str) -> 'Identity':
        return cls(IdentityType.NAME, name)

    @classmethod
    def of(cls, name_or_id: Optional[NameOrId]) -> 'Identity':
        if name_or_id is None:
            return cls()
        if isinstance(name_or_id, str):
            return cls.of_name(name_or_id)
        return cls.of_id(name_or_id)  # type: ignore[arg-type]

    @property
    def type(self) -> IdentityType:
        return self._type

    @property
    def value(self) -> Optional[NameOrId]:
        return self._value

    @property
    def id(self) -> Optional[int]:
        if self._type == IdentityType.ID:
            return self._value  # type: ignore[return-value]
        return None

    @property
    def name(self) -> Optional[str]:
        if self._type == IdentityType.NAME:
            return self._value  # type: ignore[return-value]
        return None

    def is_set(self) -> bool:
        return self._type != IdentityType.UNSET

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Identity):
            return False

        return bool(self._type == other._type and self._value == other._value)

    def __hash__(self) -> int:
        return hash((self._type, self._value))

    def __repr__(self) -> str:
        if not self.is_set():
            return 'Identity()'
        return f'Identity({self._type.value}={self._value!r})'


UNSET = Identity()


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/Key#PathElement
class PathElement:
    def __init__(self, kind: str, *, id_: Optional[int] = None,
                 name: Optional[str] = None) -> None:
        if not isinstance(kind, str) or not kind:
            raise InvalidArgument(f'kind must be a non-empty str: {kind!r}')
        ensure_utf8(kind, 'kind')
        if id_ is not None and name is not None:
            raise InvalidArgument(
                'invalid PathElement contains both ID and name')

        self._kind = kind
        if id_ is not None:
            self._identity = Identity.of_id(id_)
        elif name is not None:
            self._identity = Identity.of_name(name)
        else:
            self._identity = UNSET

    @classmethod
    def of(cls, kind: str,
           name_or_id: Optional[NameOrId] = None) -> 'PathElement':
        return cls.from_identity(kind, Identity.of(name_or_id))

    @classmethod
    def from_identity(cls, kind: str, identity: Identity) -> 'PathElement':
        return cls(kind, id_=identity.id, name=identity.name)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def id(self) -> Optional[int]:
        return self._identity.id

    @property
    def name(self) -> Optional[str]:
        return self._identity.name

    @property
    def name_or_id(self) -> Optional[NameOrId]:
        return self._identity.value

    def has_id(self) -> bool:
        return self._identity.type == IdentityType.ID

    def has_name(self) -> bool:
        return self._identity.type == IdentityType.NAME

    def is_complete(self) -> bool:
        return self._identity.is_set()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PathElement):
            return False

        return bool(self._kind == other._kind
                    and self._identity == other._identity)

    def __hash__(self) -> int:
        return hash((self._kind, self._identity))

    def __repr__(self) -> str:
        return str(self.to_repr())

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'PathElement':
        try:
            kind: str = data['kind']
            # the REST API encodes int64 values as strings
            id_: Optional[int] = int(data['id']) if 'id' in data else None
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidArgument(f'invalid path element {data!r}') from e
        name: Optional[str] = data.get('name')
        return cls(kind, id_=id_, name=name)

    def to_repr(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'kind': self._kind}
        if self.has_id():
            data['id'] = str(self.id)
        elif self.has_name():
            data['name'] = self.name

        return data

    @classmethod
    def from_pb(cls, pb: Any) -> 'PathElement':
        id_ = pb.id if pb.HasField('id') else None
        name = pb.name if pb.HasField('name') else None
        return cls(pb.kind, id_=id_, name=name)

    def to_pb(self) -> Any:
        pb = key_pb.PathElement(kind=self._kind)
        if self.has_id():
            pb.id = self.id
        elif self.has_name():
            pb.name = self.name

        return pb
