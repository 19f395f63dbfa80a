"""
Entity Base Model and Attribute Mapping

SimpleDB stores every item as an unordered bag of (name, value) string pairs
keyed by an item name. This module turns such a bag into a typed Pydantic
model.

## How Mapping Works

1. The raw attribute list is grouped into a multi-map (name -> values).
2. Each declared field picks its values from the multi-map:
   - list/set/tuple fields receive every value, sorted because SimpleDB
     returns them in no particular order
   - scalar fields receive a single value; when the item holds several,
     the smallest one as a string is kept, before any type conversion
     (``['10', '9']`` gives ``'10'``, so an ``int`` field becomes 10)
3. The item name is placed into the key field (``id`` unless overridden).
4. Pydantic coerces the strings into the declared field types.

Attributes with no matching field are ignored, so an entity may declare only
the part of the item it cares about.

## Usage Example

```python
class Customer(SimpleDBEntity):
    domain: ClassVar[Optional[str]] = "customers"

    id: int
    name: str
    tags: List[str] = Field(default_factory=list)

customer = Customer.from_attributes("42", [
    {"Name": "name", "Value": "Ada"},
    {"Name": "tags", "Value": "vip"},
    {"Name": "tags", "Value": "beta"},
])
# Customer(id=42, name='Ada', tags=['beta', 'vip'])
```
"""

import logging
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar, get_args, get_origin

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import MappingError
from ..utils import attributes_to_multimap

logger = logging.getLogger(__name__)

E = TypeVar('E', bound='SimpleDBEntity')

_MULTI_VALUED = (list, set, frozenset, tuple)


def _is_multi_valued(annotation: Any) -> bool:
    """Return True for list-like annotations, including Optional[List[...]]."""
    if annotation in _MULTI_VALUED:
        return True
    origin = get_origin(annotation)
    if origin in _MULTI_VALUED:
        return True
    if origin is not None:
        return any(_is_multi_valued(arg) for arg in get_args(annotation) if arg is not type(None))
    return False


class SimpleDBEntity(BaseModel):
    """
    Base class for entities stored in a SimpleDB domain.

    Subclasses declare typed fields and may override:
    - ``domain``: name of the backing domain (defaults to the class name)
    - ``key_field``: field that receives the item name (defaults to ``id``)
    """

    domain: ClassVar[Optional[str]] = None
    key_field: ClassVar[str] = "id"

    model_config = ConfigDict(frozen=True, extra='ignore')

    @classmethod
    def domain_name(cls) -> str:
        """Return the declared domain name or the class name."""
        return cls.domain or cls.__name__

    @classmethod
    def from_attributes(cls: Type[E], item_name: str, attributes: List[Dict[str, Any]]) -> E:
        """
        Build an entity from a SimpleDB item.

        Args:
            item_name: SimpleDB item name, used as the entity key
            attributes: Raw attribute list ({'Name': ..., 'Value': ...} dicts)

        Returns:
            Entity instance with coerced field values

        Raises:
            MappingError: If required attributes are missing or a value does
                not convert to its declared type
        """
        try:
            multimap = attributes_to_multimap(attributes)
        except ValueError as e:
            logger.error(f"Failed to decode attributes of item '{item_name}' for {cls.__name__}: {e}")
            raise MappingError(
                f"Failed to decode attributes of item '{item_name}'",
                entity_type=cls.__name__,
                item_name=item_name,
                original_error=e,
            ) from e
        data: Dict[str, Any] = {}

        for field_name, field_info in cls.model_fields.items():
            if field_name == cls.key_field:
                continue
            source = field_info.alias or field_name
            values = multimap.get(source)
            if not values:
                continue
            if _is_multi_valued(field_info.annotation):
                data[source] = sorted(values)
            else:
                if len(values) > 1:
                    logger.debug(
                        f"Attribute '{source}' of item '{item_name}' has {len(values)} values; "
                        f"keeping the lexicographically smallest for scalar field {cls.__name__}.{field_name}"
                    )
                data[source] = min(values)

        data[cls.key_field] = item_name

        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Failed to map item '{item_name}' to {cls.__name__}: {e}")
            raise MappingError(
                f"Failed to map item '{item_name}' to {cls.__name__}",
                entity_type=cls.__name__,
                item_name=item_name,
                errors=e.errors(),
                original_error=e,
            ) from e

    def get_key(self) -> Any:
        """Return the entity key."""
        return getattr(self, self.key_field)


def build_entity(entity_class: Type[E], item_name: str, attributes: List[Dict[str, Any]]) -> E:
    """Map a raw SimpleDB item onto ``entity_class``."""
    return entity_class.from_attributes(item_name, attributes)
