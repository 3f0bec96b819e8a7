from .formatting import english_enumerate  # noqa
from .typing import is_dataset, is_integer, is_sequence_of_datasets  # noqa
