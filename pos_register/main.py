# ==============================================================================
# APLICACIÓN FLASK - API JSON DE LA CAJA
# ==============================================================================
# Capa delgada sobre SaleService: cada ruta traduce request → servicio →
# respuesta JSON. Los montos viajan como enteros en unidades menores.
#
# Rutas:
#   POST   /api/sale           → iniciar venta
#   POST   /api/sale/items     → registrar ítem
#   POST   /api/sale/end       → calcular total e IVA
#   POST   /api/sale/discount  → pedir descuento
#   POST   /api/sale/pay       → cobrar y finalizar
#   DELETE /api/sale           → abandonar venta
#   GET    /api/sales          → registro de ventas
#   GET    /api/register       → saldo de caja
# ==============================================================================

import logging
from typing import Any, Dict, Optional

from flask import Blueprint, Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from pos_register import config as default_config
from pos_register.app_container import AppContainer
from pos_register.models import (
    CollaboratorUnavailable,
    FinalizationError,
    InsufficientPayment,
    InvalidAmount,
    InvalidQuantity,
    Money,
    NoActiveSale,
    NotPriced,
    PaymentAlreadyFinalized,
    PosError,
    UnknownCustomer,
    UnknownItem,
)

logger = logging.getLogger(__name__)

# Código HTTP por tipo de error del dominio
ERROR_STATUS = {
    InvalidQuantity: 400,
    InvalidAmount: 400,
    NotPriced: 400,
    InsufficientPayment: 402,
    UnknownItem: 404,
    UnknownCustomer: 404,
    NoActiveSale: 409,
    PaymentAlreadyFinalized: 409,
    CollaboratorUnavailable: 503,
    FinalizationError: 500,
}

api = Blueprint('api', __name__, url_prefix='/api')


def _container() -> AppContainer:
    return current_app.extensions['pos_container']


def _payload() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _money_from_json(value: Any) -> Money:
    """Los montos deben llegar como enteros en unidades menores."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(value)
    return Money(value)


# ═══════════════════════════════════════════════════════════════════════════════
# VENTA EN CURSO
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/sale', methods=['POST'])
def start_sale():
    customer_id = _payload().get('customer_id')
    _container().sale_service.start_sale(customer_id)
    return jsonify({'ok': True, 'mensaje': 'Venta iniciada', 'customer_id': customer_id})


@api.route('/sale/items', methods=['POST'])
def register_item():
    data = _payload()
    result = _container().sale_service.register_item(
        data.get('item_id', ''), data.get('quantity', 1)
    )
    return jsonify({
        'ok': True,
        'item': result['item'].to_dict(),
        'quantity': result['quantity'],
        'running_total': result['running_total'].minor_units,
        'running_vat': result['running_vat'].minor_units,
    })


@api.route('/sale/end', methods=['POST'])
def end_sale():
    total, vat = _container().sale_service.end_sale()
    return jsonify({'ok': True, 'total_price': total.minor_units, 'total_vat': vat.minor_units})


@api.route('/sale/discount', methods=['POST'])
def request_discount():
    sale_service = _container().sale_service
    discount = sale_service.request_discount(_payload().get('customer_id'))
    payment = sale_service.payment
    response = {'ok': True, 'discount': discount.minor_units}
    if payment.has_discount:
        response['total_price_after_discount'] = payment.total_price_after_discount.minor_units
        response['total_vat_after_discount'] = payment.total_vat_after_discount.minor_units
    return jsonify(response)


@api.route('/sale/pay', methods=['POST'])
def pay():
    amount = _money_from_json(_payload().get('amount'))
    record = _container().sale_service.pay(amount)
    return jsonify({'ok': True, 'mensaje': 'Venta registrada', 'sale': record.to_dict()})


@api.route('/sale', methods=['DELETE'])
def abandon_sale():
    _container().sale_service.abandon_sale()
    return jsonify({'ok': True, 'mensaje': 'Venta descartada'})


# ═══════════════════════════════════════════════════════════════════════════════
# CONSULTAS
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/sales', methods=['GET'])
def list_sales():
    sales_repo = _container().sales_repo
    return jsonify({
        'ok': True,
        'sales': [record.to_dict() for record in sales_repo.get_all()],
        'total_revenue': sales_repo.total_revenue().minor_units,
    })


@api.route('/register', methods=['GET'])
def register_balance():
    cash_register = _container().cash_register
    return jsonify({
        'ok': True,
        'initial_balance': cash_register.initial_balance.minor_units,
        'balance': cash_register.balance.minor_units,
        'movements': len(cash_register.movements),
    })


# ═══════════════════════════════════════════════════════════════════════════════
# MANEJO DE ERRORES
# ═══════════════════════════════════════════════════════════════════════════════

def handle_pos_error(error: PosError):
    status = ERROR_STATUS.get(type(error), 400)
    if status >= 500:
        logger.error("Error en %s: %s", request.path, error, exc_info=error)
    else:
        logger.warning("Operación rechazada en %s: %s", request.path, error)
    return jsonify(error.to_dict()), status


def handle_http_error(error: HTTPException):
    return jsonify({'ok': False, 'error': error.description, 'code': error.name}), error.code


# ═══════════════════════════════════════════════════════════════════════════════
# FÁBRICA DE LA APLICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

def create_app(
    container: Optional[AppContainer] = None,
    settings: Optional[Dict[str, Any]] = None
) -> Flask:
    """
    Crea la aplicación Flask.

    Args:
        container: Contenedor de dependencias (se crea uno si no se indica)
        settings: Configuración que sobrescribe la del entorno

    Returns:
        Aplicación lista para servir
    """
    app = Flask(__name__)
    app.config.update(default_config.load_config())
    app.config.update(settings or {})
    default_config.configure_logging(app.config['LOG_LEVEL'])

    if container is None:
        container = AppContainer(dict(app.config))
        if not app.config['PRODUCTION_MODE']:
            container.seed_demo_data()
    app.extensions['pos_container'] = container

    app.register_blueprint(api)
    app.register_error_handler(PosError, handle_pos_error)
    app.register_error_handler(HTTPException, handle_http_error)
    return app


if __name__ == '__main__':
    import os

    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    HOST = os.environ.get('FLASK_HOST', '127.0.0.1')
    PORT = int(os.environ.get('FLASK_PORT', 5000))
    create_app().run(host=HOST, port=PORT, debug=DEBUG)
