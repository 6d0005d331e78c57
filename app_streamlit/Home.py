# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import streamlit as st

from core.config import configure_logging

configure_logging()

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="Hybrid Interop", page_icon="🔐", layout="centered")

# Presenta el nombre del producto y su propósito general.
st.title("🔐 Hybrid Interop")
st.write(
    "Banco de pruebas del cifrado híbrido RSA-OAEP + AES-GCM-256 compartido "
    "entre el backend (clave privada) y los clientes (clave pública)."
)
st.info(
    "1. Genera las claves del backend en **Claves**.\n"
    "2. Cifra un mensaje como cliente en **Cifrar**.\n"
    "3. Pega el JSON recibido en **Descifrar** para abrirlo como backend."
)
