# ==============================================================================
# POS REGISTER - Motor de caja (precios, descuentos, pago y finalización)
# ==============================================================================

__version__ = '1.0.0'
