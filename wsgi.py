# ==============================================================================
# WSGI Entry Point - Para Gunicorn en producción
# ==============================================================================
# Punto de entrada para servidores WSGI como Gunicorn.
#
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# ESTRUCTURA DEL PROYECTO:
#   repo_root/             <- Directorio de trabajo (en sys.path automáticamente)
#   ├── wsgi.py            <- Este archivo
#   ├── pyproject.toml
#   └── pos_register/      <- Paquete Python
#       ├── main.py
#       ├── services/
#       └── repositories/
# ==============================================================================

from pos_register.main import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='127.0.0.1', port=5000)
