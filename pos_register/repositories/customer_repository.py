# ==============================================================================
# REPOSITORIO DE CLIENTES
# ==============================================================================

from pos_register.models import Customer, UnknownCustomer
from pos_register.repositories.base import DictRepository


class CustomerRepository(DictRepository[Customer]):
    """Base de datos de clientes registrados."""

    def add_customer(self, customer: Customer) -> None:
        self.update(customer.customer_id, customer)

    def get_customer(self, customer_id: str) -> Customer:
        """
        Obtiene un cliente registrado.

        Raises:
            UnknownCustomer: Si el cliente no está registrado
        """
        customer = self.get_by_id(customer_id)
        if customer is None:
            raise UnknownCustomer(customer_id)
        return customer
