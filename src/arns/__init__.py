from .main import main
from .resource import (
    NULL_PLACEHOLDER,
    ArnResource,
    ArnResourceBuilder,
    BlankResourceError,
    parse_resource,
)
from .version import VERSION
