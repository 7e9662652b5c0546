"""Customer registration — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import logger, ordering


@ordering.command(part_of="Customer")
class RegisterCustomer:
    """Create a customer that orders can be associated with."""

    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    cpf = String(max_length=11)


@ordering.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        customer = Customer.register(
            name=command.name,
            email=command.email,
            cpf=command.cpf,
        )
        current_domain.repository_for(Customer).add(customer)
        logger.info("Customer registered", customer_id=str(customer.id))
        return str(customer.id)
