import logging
import threading
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

from ..config import SimpleDBConfig
from ..core import CountQueryExecutor, DomainGateway, Paginator, create_domain_gateway
from ..exceptions import ItemNotFoundError, ValidationError
from ..models import Page, SimpleDBEntity, build_entity

T = TypeVar('T', bound=SimpleDBEntity)

logger = logging.getLogger(__name__)


class SimpleDBDAO(Generic[T]):
    """Read-only data access object for one SimpleDB domain and entity type.

    The domain name is resolved once, at construction: an explicit
    ``domain_name`` wins, otherwise the entity's declared domain (or class
    name) is used, with the configured prefix applied. The gateway is created
    on first use and reused for the lifetime of the DAO. Pass ``gateway`` to
    share one connection between several DAOs.
    """

    def __init__(
        self,
        config: SimpleDBConfig,
        entity_class: Type[T],
        domain_name: Optional[str] = None,
        gateway: Optional[DomainGateway] = None,
    ):
        """Initialize the DAO.

        Args:
            config: SimpleDB configuration object
            entity_class: SimpleDBEntity subclass the domain's items map to
            domain_name: Explicit domain name, used verbatim
            gateway: Pre-built gateway bound to the domain
        """
        self.config = config
        self.entity_class = entity_class
        if gateway is not None:
            self.domain_name = gateway.domain_name
        elif domain_name:
            self.domain_name = domain_name
        else:
            self.domain_name = config.get_domain_name(entity_class.domain_name())
        self._gateway = gateway
        self._init_lock = threading.Lock()
        self._paginator: Optional[Paginator[T]] = None
        self._count_executor: Optional[CountQueryExecutor] = None

    @property
    def gateway(self) -> DomainGateway:
        """Lazy, at-most-once initialization of the domain gateway."""
        if self._gateway is None:
            with self._init_lock:
                if self._gateway is None:
                    self._gateway = DomainGateway(self.config, self.domain_name)
        return self._gateway

    @property
    def paginator(self) -> Paginator[T]:
        if self._paginator is None:
            # Resolve the gateway first; the lock is not reentrant
            gateway = self.gateway
            with self._init_lock:
                if self._paginator is None:
                    self._paginator = Paginator(gateway, self._build_entity)
        return self._paginator

    @property
    def count_executor(self) -> CountQueryExecutor:
        if self._count_executor is None:
            gateway = self.gateway
            with self._init_lock:
                if self._count_executor is None:
                    self._count_executor = CountQueryExecutor(gateway)
        return self._count_executor

    def _build_entity(self, item_name: str, attributes: List[dict]) -> T:
        return build_entity(self.entity_class, item_name, attributes)

    def get_by_id(self, id: Any) -> T:
        """Get an entity by its key.

        Args:
            id: Entity key; converted with str() to the SimpleDB item name

        Returns:
            The mapped entity

        Raises:
            ItemNotFoundError: If the domain has no item with this key
            MappingError: If the item does not fit the entity type
            StoreAccessError: If the SimpleDB call fails
        """
        item_name = str(id) if id is not None else ""
        if not item_name:
            raise ValidationError("Item key must not be empty", context={'domain_name': self.domain_name})

        attributes = self.gateway.get_attributes(item_name)
        if not attributes:
            logger.debug(f"No item '{item_name}' in {self.domain_name}")
            raise ItemNotFoundError(self.domain_name, item_name)
        return self._build_entity(item_name, attributes)

    def get_all(self) -> List[T]:
        """Get every entity of the domain, following continuation tokens to the end.

        Raises:
            StaleCursorError: If the store returns an empty page with a token
            StoreAccessError: If any SimpleDB call fails
        """
        return self.paginator.fetch_all()

    def iter_all(self) -> Iterator[T]:
        """Lazy variant of get_all(); fetches the next page only when needed."""
        return self.paginator.iter_all()

    def get_portion(self, count: Optional[int] = None, next_token: Optional[str] = None) -> Page[T]:
        """Get one page of entities.

        Args:
            count: Maximum entities to return. None, 0 or more than 250 returns
                at most 250.
            next_token: Token from a previous Page, None for the first page

        Returns:
            Page holding the entities and the token for the next portion
        """
        return self.paginator.fetch_page(count, next_token)

    def count_rows(self, where: Optional[str] = None) -> int:
        """Count the items of the domain.

        Args:
            where: Optional condition, the part of the query after WHERE.
                Inserted verbatim, so it must not carry untrusted input.

        Returns:
            Number of matching items, 0 for an empty result

        Raises:
            ParseError: If the count is not numeric
            StoreAccessError: If the query fails
        """
        if where:
            return self.count_executor.count_where(where)
        return self.count_executor.count_all()


def create_dao(
    config: SimpleDBConfig,
    entity_class: Type[T],
    client: Optional[Any] = None,
) -> SimpleDBDAO[T]:
    """Create a DAO whose gateway uses ``client`` (shared boto3 sdb client)."""
    gateway = create_domain_gateway(config, entity_class.domain_name(), client) if client is not None else None
    return SimpleDBDAO(config, entity_class, gateway=gateway)
