import enum


class IdentityType(enum.Enum):
    ID = 'id'
    NAME = 'name'
    UNSET = 'unset'


# ids are int64 on the wire
MAX_ID = 2 ** 63 - 1
MIN_ID = -2 ** 63

# checked in order by utils.get_default_dataset
DATASET_ENV_VARS = (
    'DATASTORE_DATASET',
    'DATASTORE_PROJECT_ID',
    'GOOGLE_CLOUD_PROJECT',
)
