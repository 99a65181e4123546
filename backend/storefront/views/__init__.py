from storefront.views.account_handlers import (
    account as account,
)
from storefront.views.account_handlers import (
    checkout as checkout,
)
from storefront.views.account_handlers import (
    orders as orders,
)
from storefront.views.auth_handlers import (
    login as login,
)
from storefront.views.auth_handlers import (
    login_entry as login_entry,
)
from storefront.views.auth_handlers import (
    logout as logout,
)
from storefront.views.auth_handlers import (
    register as register,
)
from storefront.views.auth_handlers import (
    session as session,
)
from storefront.views.product_handlers import (
    get_product as get_product,
)
from storefront.views.product_handlers import (
    list_products as list_products,
)
