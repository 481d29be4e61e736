# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Raíz de composición
# ==============================================================================
# Este módulo construye y es dueño de una instancia de cada colaborador
# externo y de cada servicio. Facilita:
#   - Inyección de dependencias (ningún servicio crea sus colaboradores)
#   - Testing (se pueden reemplazar colaboradores por dobles)
#   - Cambiar un sistema simulado por uno real sin tocar los servicios
# ==============================================================================

from typing import Any, Dict, Optional

from pos_register import config as default_config
from pos_register.models import (
    Customer,
    DiscountRule,
    DiscountType,
    Item,
    Money,
)

# ═══════════════════════════════════════════════════════════════════════════════
# COLABORADORES EXTERNOS (simulados en memoria)
# ═══════════════════════════════════════════════════════════════════════════════
from pos_register.repositories import (
    AccountingRepository,
    AuditRepository,
    CashRegister,
    CustomerRepository,
    DiscountRepository,
    InventoryRepository,
    SalesRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS
# ═══════════════════════════════════════════════════════════════════════════════
from pos_register.services import (
    AuditService,
    DiscountPolicy,
    ReceiptPrinter,
    SaleService,
    TotalRevenueFileOutput,
    TotalRevenueView,
    TransactionFinalizer,
)


class AppContainer:
    """
    Contenedor de dependencias de la caja.

    Cada propiedad crea su instancia la primera vez (lazy loading) y la
    reutiliza después.

    Uso:
        container = AppContainer()
        sale_service = container.sale_service
    """

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        """
        Args:
            settings: Configuración (por defecto config.load_config())
        """
        self.settings = dict(default_config.load_config())
        self.settings.update(settings or {})
        self.reset()

    # =========================================================================
    # COLABORADORES EXTERNOS
    # =========================================================================

    @property
    def inventory_repo(self) -> InventoryRepository:
        if self._inventory_repo is None:
            self._inventory_repo = InventoryRepository()
        return self._inventory_repo

    @property
    def customer_repo(self) -> CustomerRepository:
        if self._customer_repo is None:
            self._customer_repo = CustomerRepository()
        return self._customer_repo

    @property
    def discount_repo(self) -> DiscountRepository:
        if self._discount_repo is None:
            self._discount_repo = DiscountRepository()
        return self._discount_repo

    @property
    def accounting_repo(self) -> AccountingRepository:
        if self._accounting_repo is None:
            self._accounting_repo = AccountingRepository()
        return self._accounting_repo

    @property
    def sales_repo(self) -> SalesRepository:
        if self._sales_repo is None:
            self._sales_repo = SalesRepository()
        return self._sales_repo

    @property
    def audit_repo(self) -> AuditRepository:
        if self._audit_repo is None:
            self._audit_repo = AuditRepository()
        return self._audit_repo

    @property
    def cash_register(self) -> CashRegister:
        """Cajón de dinero con el saldo inicial configurado."""
        if self._cash_register is None:
            self._cash_register = CashRegister(
                Money(self.settings['INITIAL_CASH_BALANCE'])
            )
        return self._cash_register

    @property
    def receipt_printer(self) -> ReceiptPrinter:
        if self._receipt_printer is None:
            self._receipt_printer = ReceiptPrinter()
        return self._receipt_printer

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def audit_service(self) -> AuditService:
        if self._audit_service is None:
            self._audit_service = AuditService(self.audit_repo)
        return self._audit_service

    @property
    def revenue_view(self) -> TotalRevenueView:
        if self._revenue_view is None:
            self._revenue_view = TotalRevenueView()
        return self._revenue_view

    @property
    def revenue_file_output(self) -> TotalRevenueFileOutput:
        if self._revenue_file_output is None:
            self._revenue_file_output = TotalRevenueFileOutput(
                self.settings['REVENUE_LOG_PATH']
            )
        return self._revenue_file_output

    @property
    def finalizer(self) -> TransactionFinalizer:
        """Finalizador con sus observadores de finalización registrados."""
        if self._finalizer is None:
            self._finalizer = TransactionFinalizer(
                inventory=self.inventory_repo,
                accounting=self.accounting_repo,
                cash_register=self.cash_register,
                receipt_printer=self.receipt_printer,
                sale_log=self.sales_repo,
                discount_source=self.discount_repo,
                customer_registry=self.customer_repo,
            )
            self._finalizer.add_observers([
                self.revenue_file_output,
                self.audit_service,
            ])
        return self._finalizer

    @property
    def sale_service(self) -> SaleService:
        """Controlador de ventas con sus observadores de pago registrados."""
        if self._sale_service is None:
            self._sale_service = SaleService(self.finalizer, DiscountPolicy())
            self._sale_service.add_payment_observers([
                self.revenue_view,
                self.audit_service,
            ])
        return self._sale_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """
        Reinicia todas las instancias.
        Útil para testing o para abrir una caja nueva.
        """
        self._inventory_repo = None
        self._customer_repo = None
        self._discount_repo = None
        self._accounting_repo = None
        self._sales_repo = None
        self._audit_repo = None
        self._cash_register = None
        self._receipt_printer = None

        self._audit_service = None
        self._revenue_view = None
        self._revenue_file_output = None
        self._finalizer = None
        self._sale_service = None

    def seed_demo_data(self) -> None:
        """Catálogo, clientes y descuentos de ejemplo (modo desarrollo)."""
        inventory = self.inventory_repo
        inventory.add_item(Item('abc123', 'Leche entera 1L', Money(1000), '0.06'), stock=50)
        inventory.add_item(Item('def456', 'Pan integral', Money(2500), '0.12'), stock=30)
        inventory.add_item(Item('ghi789', 'Café molido 500g', Money(6900), '0.12'), stock=20)

        self.customer_repo.add_customer(Customer('19900101', 'Cliente Frecuente', 'oro'))

        discounts = self.discount_repo
        discounts.add_rule(DiscountRule(
            'PAN-3X', DiscountType.ITEM, '0.20', item_id='def456', min_quantity=3,
            description='20% en pan integral desde 3 unidades'
        ))
        discounts.add_rule(DiscountRule(
            'TOTAL-100', DiscountType.TOTAL_THRESHOLD, '0.05', threshold=Money(10000),
            description='5% en compras desde 100.00'
        ))
        discounts.add_rule(DiscountRule(
            'FIEL-ORO', DiscountType.CUSTOMER, '0.10', customer_id='19900101',
            description='10% cliente frecuente'
        ))
