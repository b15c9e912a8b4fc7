"""
Protocol buffer messages for the binary key form.

The layout is the Datastore `v1beta2` key:

    message PartitionId {
      optional string dataset_id = 3;
      optional string namespace = 4;
    }

    message Key {
      message PathElement {
        required string kind = 1;
        optional int64 id = 2;
        optional string name = 3;
      }
      optional PartitionId partition_id = 1;
      repeated PathElement path_element = 2;
    }

The descriptors are registered in a private pool so that they can never clash
with another copy of the Datastore protos loaded into the default pool.
"""
from google.protobuf import descriptor_pb2
from google.protobuf import descriptor_pool
from google.protobuf import message_factory


PACKAGE = 'gcloud.aio.datastore_keys'

_Field = descriptor_pb2.FieldDescriptorProto


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name='gcloud/aio/datastore_keys/key.proto',
        package=PACKAGE,
        syntax='proto2',
    )

    partition_id = proto.message_type.add(name='PartitionId')
    partition_id.field.add(name='dataset_id', number=3,
                           type=_Field.TYPE_STRING,
                           label=_Field.LABEL_OPTIONAL)
    partition_id.field.add(name='namespace', number=4,
                           type=_Field.TYPE_STRING,
                           label=_Field.LABEL_OPTIONAL)

    key = proto.message_type.add(name='Key')
    path_element = key.nested_type.add(name='PathElement')
    path_element.field.add(name='kind', number=1, type=_Field.TYPE_STRING,
                           label=_Field.LABEL_REQUIRED)
    path_element.field.add(name='id', number=2, type=_Field.TYPE_INT64,
                           label=_Field.LABEL_OPTIONAL)
    path_element.field.add(name='name', number=3, type=_Field.TYPE_STRING,
                           label=_Field.LABEL_OPTIONAL)

    key.field.add(name='partition_id', number=1, type=_Field.TYPE_MESSAGE,
                  label=_Field.LABEL_OPTIONAL,
                  type_name=f'.{PACKAGE}.PartitionId')
    key.field.add(name='path_element', number=2, type=_Field.TYPE_MESSAGE,
                  label=_Field.LABEL_REPEATED,
                  type_name=f'.{PACKAGE}.Key.PathElement')

    return proto


POOL = descriptor_pool.DescriptorPool()
POOL.AddSerializedFile(_build_file().SerializeToString())

PartitionId = message_factory.GetMessageClass(
    POOL.FindMessageTypeByName(f'{PACKAGE}.PartitionId'))
Key = message_factory.GetMessageClass(
    POOL.FindMessageTypeByName(f'{PACKAGE}.Key'))
PathElement = message_factory.GetMessageClass(
    POOL.FindMessageTypeByName(f'{PACKAGE}.Key.PathElement'))


__all__ = [
    'Key',
    'PartitionId',
    'PathElement',
]
