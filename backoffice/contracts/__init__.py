from backoffice.contracts.article import article_contract
from backoffice.contracts.banner import banner_contract
from backoffice.contracts.base import Contract, Endpoint
from backoffice.contracts.customer import customer_contract
from backoffice.contracts.orders import batch_order_contract, order_contract
from backoffice.contracts.product import product_contract
from backoffice.contracts.staff import staff_contract
from backoffice.contracts.supplier import supplier_contract
from backoffice.contracts.tag import tag_contract
from backoffice.contracts.user import user_contract

ALL_CONTRACTS = (
    user_contract,
    product_contract,
    order_contract,
    batch_order_contract,
    banner_contract,
    article_contract,
    tag_contract,
    supplier_contract,
    staff_contract,
    customer_contract,
)
