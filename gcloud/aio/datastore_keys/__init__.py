"""
This library implements Google Cloud Datastore keys: building them, checking
their structure and converting them to and from their binary, URL-safe and
REST representations.

## Installation

```console
$ pip install --upgrade gcloud-aio-datastore-keys
```

## Usage

```python
from gcloud.aio.datastore_keys import Key
from gcloud.aio.datastore_keys import KeyBuilder
from gcloud.aio.datastore_keys import PartialKey
from gcloud.aio.datastore_keys import PathElement

# a root key, identified by name
user = Key.builder('my-gcloud-project', 'User', 'aardvark').build()

# a child key, nested below its parent and sharing its dataset and namespace
post = Key.builder(None, 'Post', 42, parent=user).build()
assert post.path == (PathElement('User', name='aardvark'),
                     PathElement('Post', id_=42))
assert post.parent() == user

# copy an existing key, overriding a single field
renamed = KeyBuilder.from_key(post).name('hello-world').build()

# partial keys, whose id is left for the server to allocate
draft = PartialKey.builder('my-gcloud-project', 'Post',
                           parent=user).build_partial()
assert not draft.is_complete()

# binary and url-safe forms
assert Key.from_bytes(post.to_bytes()) == post
assert Key.from_url_safe(post.to_url_safe()) == post

# and the JSON representation used by the Datastore REST API
assert Key.from_repr(post.to_repr()) == post
```

If no dataset is given (`Key.builder(None, ...)` with no `parent`), it is read
from `$DATASTORE_DATASET`, `$DATASTORE_PROJECT_ID` or `$GOOGLE_CLOUD_PROJECT`.

## Errors

Every error derives from `DatastoreKeyError`:

* `InvalidArgument` for structurally invalid keys or path elements, eg. an
  empty kind or a path element with both an id and a name
* `IncompleteKey` (an `InvalidArgument`) when a complete `Key` was required
  but the last path element has no id or name
* `InvalidEncoding` when binary or URL-safe input cannot be decoded

## Custom Subclasses

As with the rest of `gcloud-aio`, the types created by this library may be
overridden:

```python
class MyKeyBuilder(gcloud.aio.datastore_keys.KeyBuilder):
    key_kind = MyKey
    partial_key_kind = MyPartialKey
    path_element_kind = MyPathElement
```
"""
from importlib.metadata import version
__version__ = version('gcloud-aio-datastore-keys')

from gcloud.aio.datastore_keys.builder import KeyBuilder
from gcloud.aio.datastore_keys.constants import IdentityType
from gcloud.aio.datastore_keys.exceptions import DatastoreKeyError
from gcloud.aio.datastore_keys.exceptions import IncompleteKey
from gcloud.aio.datastore_keys.exceptions import InvalidArgument
from gcloud.aio.datastore_keys.exceptions import InvalidEncoding
from gcloud.aio.datastore_keys.key import into_key
from gcloud.aio.datastore_keys.key import Key
from gcloud.aio.datastore_keys.key import PartialKey
from gcloud.aio.datastore_keys.path_element import Identity
from gcloud.aio.datastore_keys.path_element import PathElement
from gcloud.aio.datastore_keys.utils import get_default_dataset


__all__ = [
    'DatastoreKeyError',
    'Identity',
    'IdentityType',
    'IncompleteKey',
    'InvalidArgument',
    'InvalidEncoding',
    'Key',
    'KeyBuilder',
    'PartialKey',
    'PathElement',
    '__version__',
    'get_default_dataset',
    'into_key',
]
