import pytest
from gcloud.aio.datastore_keys import IncompleteKey
from gcloud.aio.datastore_keys import InvalidArgument
from gcloud.aio.datastore_keys import Key
from gcloud.aio.datastore_keys import KeyBuilder
from gcloud.aio.datastore_keys import PartialKey
from gcloud.aio.datastore_keys import PathElement
from gcloud.aio.datastore_keys.constants import DATASET_ENV_VARS


class TestKeyBuilder:
    @staticmethod
    def test_build_by_name():
        key = Key.builder('my-dataset', 'Kind', 'x').build()

        assert key.dataset == 'my-dataset'
        assert key.namespace is None
        assert key.path == (PathElement('Kind', name='x'),)
        assert key.has_name()

    @staticmethod
    def test_build_by_id():
        key = Key.builder('my-dataset', 'Kind', 5).build()

        assert key.path == (PathElement('Kind', id_=5),)
        assert key.has_id()

    @staticmethod
    def test_name_clears_id():
        key = Key.builder('my-dataset', 'Kind', 'y').id(5).name('x').build()

        assert key.has_name()
        assert not key.has_id()
        assert key.name == 'x'

    @staticmethod
    def test_id_clears_name():
        key = Key.builder('my-dataset', 'Kind', 1).name('x').id(5).build()

        assert key.has_id()
        assert not key.has_name()
        assert key.id == 5

    @staticmethod
    def test_build_without_identity_fails():
        builder = Key.builder('my-dataset', 'Kind', 1).clear_identity()

        with pytest.raises(InvalidArgument):
            builder.build()

        with pytest.raises(IncompleteKey):
            builder.build()

    @staticmethod
    def test_build_partial_without_identity():
        key = Key.builder('my-dataset', 'Kind', 1).clear_identity() \
            .build_partial()

        assert type(key) is PartialKey  # pylint: disable=unidiomatic-typecheck
        assert not key.is_complete()

    @staticmethod
    def test_partial_key_builder():
        key = PartialKey.builder('my-dataset', 'Kind').build_partial()

        assert key == PartialKey('my-dataset', [PathElement('Kind')])

    @staticmethod
    def test_setters():
        key = Key.builder('my-dataset', 'Kind', 1) \
            .dataset('other-dataset') \
            .namespace('my-namespace') \
            .kind('Other') \
            .ancestors(PathElement('A', id_=1), PathElement('B', name='b')) \
            .build()

        assert key == Key('other-dataset',
                          [PathElement('A', id_=1),
                           PathElement('B', name='b'),
                           PathElement('Other', id_=1)],
                          namespace='my-namespace')

    @staticmethod
    def test_clear_ancestors():
        key = Key.builder('my-dataset', 'Kind', 1) \
            .ancestors(PathElement('A', id_=1)) \
            .clear_ancestors() \
            .build()

        assert key.ancestors == ()

    @staticmethod
    def test_incomplete_ancestor_is_rejected():
        with pytest.raises(InvalidArgument):
            Key.builder('my-dataset', 'Kind', 1).ancestors(PathElement('A'))

    @staticmethod
    def test_invalid_identity_is_rejected():
        builder = Key.builder('my-dataset', 'Kind', 1)

        with pytest.raises(InvalidArgument):
            builder.name('')
        with pytest.raises(InvalidArgument):
            builder.id(True)

    @staticmethod
    def test_empty_kind_is_rejected_on_build():
        with pytest.raises(InvalidArgument):
            Key.builder('my-dataset', '', 1).build()

    @staticmethod
    def test_builds_are_independent_snapshots():
        builder = Key.builder('my-dataset', 'Kind', 1)
        first = builder.build()

        builder.ancestors(PathElement('A', id_=1)).id(2)
        second = builder.build()

        assert first.path == (PathElement('Kind', id_=1),)
        assert second.path == (PathElement('A', id_=1),
                               PathElement('Kind', id_=2))

    @staticmethod
    def test_child_of_parent():
        parent = Key.builder('d', 'A', 1).build()

        child = Key.builder('d', 'B', 'y', parent=parent).build()

        assert child.dataset == 'd'
        assert child.path == (PathElement('A', id_=1),
                              PathElement('B', name='y'))
        assert child.has_name()
        assert child.parent() == parent

    @staticmethod
    def test_child_inherits_dataset_and_namespace(key):
        child = Key.builder(None, 'Child', 3, parent=key).build()

        assert child.dataset == key.dataset
        assert child.namespace == key.namespace
        assert child.ancestors == key.path

    @staticmethod
    def test_grandchild_keeps_the_full_path(key):
        child = Key.builder(None, 'Child', 3, parent=key).build()
        grandchild = Key.builder(None, 'Grandchild', 'g', parent=child).build()

        assert [p.kind for p in grandchild.path] == [
            'Root', 'Kind', 'Child', 'Grandchild']
        assert grandchild.parent().parent() == key

    @staticmethod
    def test_child_with_mismatched_dataset_fails(key):
        with pytest.raises(InvalidArgument):
            Key.builder('other-dataset', 'Child', 3, parent=key)

    @staticmethod
    def test_partial_child(key):
        child = PartialKey.builder(None, 'Child', parent=key).build_partial()

        assert not child.is_complete()
        assert child.ancestors == key.path

    @staticmethod
    def test_child_of_incomplete_parent_fails():
        parent = PartialKey('d', [PathElement('A')])

        with pytest.raises(InvalidArgument):
            KeyBuilder.child_of(parent, 'B', 1)

    @staticmethod
    def test_copy_builder_reproduces_key(key):
        assert KeyBuilder.from_key(key).build() == key
        assert key.to_builder().build() == key

    @staticmethod
    def test_copy_builder_override(key):
        copy = KeyBuilder.from_key(key).id(42).build()

        assert copy.dataset == key.dataset
        assert copy.namespace == key.namespace
        assert copy.ancestors == key.ancestors
        assert copy.id == 42
        assert copy.name is None

    @staticmethod
    def test_copy_builder_does_not_alter_the_original(key):
        original = key.to_repr()

        key.to_builder().ancestors(PathElement('Extra', id_=9)).build()

        assert key.to_repr() == original

    @staticmethod
    def test_dataset_from_environment(monkeypatch):
        for env_var in DATASET_ENV_VARS:
            monkeypatch.delenv(env_var, raising=False)
        monkeypatch.setenv('GOOGLE_CLOUD_PROJECT', 'from-env')

        key = Key.builder(None, 'Kind', 1).build()

        assert key.dataset == 'from-env'

    @staticmethod
    def test_missing_dataset_fails(monkeypatch):
        for env_var in DATASET_ENV_VARS:
            monkeypatch.delenv(env_var, raising=False)

        with pytest.raises(InvalidArgument) as ex_info:
            Key.builder(None, 'Kind', 1)

        assert 'could not determine dataset' in ex_info.value.args[0]

    @staticmethod
    def test_custom_kinds():
        class MyKey(Key):
            pass

        class MyKeyBuilder(KeyBuilder):
            key_kind = MyKey

        key = MyKeyBuilder('my-dataset', 'Kind', 1).build()

        assert isinstance(key, MyKey)

    @staticmethod
    @pytest.fixture(scope='session')
    def key() -> Key:
        return Key('my-dataset',
                   [PathElement('Root', name='r'),
                    PathElement('Kind', name='k')],
                   namespace='my-namespace')
