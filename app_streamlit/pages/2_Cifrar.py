# --------------------------------------------------------------
# File: 2_Cifrar.py
# Description: Cifra un mensaje como cliente con la clave pública del backend.
# --------------------------------------------------------------

import streamlit as st

from api.services import encrypt_for_backend

st.title("⬆️ Cifrar como cliente")

plaintext = st.text_area(
    "Mensaje en claro",
    value='{"Code":"172","Amount":100.0,"Currency":"INR"}',
    key="enc_plaintext",
)
sign = st.checkbox("Firmar el payload con la clave del cliente", value=False)

if st.button("Cifrar", key="btn_encrypt"):
    ok, msg, message_json, dbg = encrypt_for_backend(plaintext, sign=sign)
    if ok:
        st.success(msg)
        st.code(dbg)
        st.markdown("### SecureMessage")
        st.code(message_json, language="json")
        # Conserva el último mensaje para precargarlo en la página de descifrado.
        st.session_state["last_message"] = message_json
    else:
        st.error(msg)
