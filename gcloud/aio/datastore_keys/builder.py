from typing import List
from typing import Optional

from gcloud.aio.datastore_keys.exceptions import InvalidArgument
from gcloud.aio.datastore_keys.key import into_key
from gcloud.aio.datastore_keys.key import Key
from gcloud.aio.datastore_keys.key import PartialKey
from gcloud.aio.datastore_keys.path_element import Identity
from gcloud.aio.datastore_keys.path_element import NameOrId
from gcloud.aio.datastore_keys.path_element import PathElement
from gcloud.aio.datastore_keys.path_element import UNSET
from gcloud.aio.datastore_keys.utils import get_default_dataset


class KeyBuilder:
    """
    Mutable accumulator for a key's dataset, namespace, ancestors, kind and
    terminal identity.

    A builder belongs to a single owner. `build()` and `build_partial()` copy
    the current state, so keys built earlier are not affected by later calls
    on the same builder.
    """
    key_kind = Key
    partial_key_kind = PartialKey
    path_element_kind = PathElement

    def __init__(self, dataset: Optional[str], kind: str,
                 name_or_id: Optional[NameOrId] = None, *,
                 namespace: Optional[str] = None) -> None:
        if dataset is None:
            dataset = get_default_dataset()
            if not dataset:
                raise InvalidArgument(
                    'could not determine dataset, please set it manually '
                    'or via $DATASTORE_DATASET')

        self._dataset: str = dataset
        self._namespace = namespace
        self._ancestors: List[PathElement] = []
        self._kind = kind
        self._identity = Identity.of(name_or_id)

    @classmethod
    def from_key(cls, key: PartialKey) -> 'KeyBuilder':
        builder = cls(key.dataset, key.kind, namespace=key.namespace)
        builder.ancestors(*key.ancestors)
        builder._identity = key.leaf.identity
        return builder

    @classmethod
    def child_of(cls, parent: Key, kind: str,
                 name_or_id: Optional[NameOrId] = None, *,
                 dataset: Optional[str] = None) -> 'KeyBuilder':
        if not parent.is_complete():
            raise InvalidArgument(f'parent {parent!r} is not complete')
        if dataset is not None and dataset != parent.dataset:
            raise InvalidArgument(
                f'dataset {dataset!r} does not match parent dataset '
                f'{parent.dataset!r}')

        builder = cls(parent.dataset, kind, name_or_id,
                      namespace=parent.namespace)
        builder.ancestors(*parent.path)
        return builder

    def dataset(self, dataset: str) -> 'KeyBuilder':
        self._dataset = dataset
        return self

    def namespace(self, namespace: Optional[str]) -> 'KeyBuilder':
        self._namespace = namespace
        return self

    def kind(self, kind: str) -> 'KeyBuilder':
        self._kind = kind
        return self

    def ancestors(self, *elements: PathElement) -> 'KeyBuilder':
        for element in elements:
            if not element.is_complete():
                raise InvalidArgument(
                    f'ancestor {element!r} has neither an id nor a name')
        self._ancestors.extend(elements)
        return self

    def clear_ancestors(self) -> 'KeyBuilder':
        self._ancestors = []
        return self

    def id(self, id_: int) -> 'KeyBuilder':
        self._identity = Identity.of_id(id_)
        return self

    def name(self, name: str) -> 'KeyBuilder':
        self._identity = Identity.of_name(name)
        return self

    def clear_identity(self) -> 'KeyBuilder':
        self._identity = UNSET
        return self

    def build_partial(self) -> PartialKey:
        leaf = self.path_element_kind.from_identity(self._kind,
                                                    self._identity)
        return self.partial_key_kind(self._dataset,
                                     path=[*self._ancestors, leaf],
                                     namespace=self._namespace)

    def build(self) -> Key:
        return into_key(self.build_partial(), self.key_kind)

    def __repr__(self) -> str:
        return (f'KeyBuilder(dataset={self._dataset!r}, '
                f'namespace={self._namespace!r}, '
                f'ancestors={self._ancestors!r}, kind={self._kind!r}, '
                f'identity={self._identity!r})')
