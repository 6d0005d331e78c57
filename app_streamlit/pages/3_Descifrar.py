# --------------------------------------------------------------
# File: 3_Descifrar.py
# Description: Abre como backend un SecureMessage recibido en JSON.
# --------------------------------------------------------------

import streamlit as st

from api.services import decrypt_on_backend

st.title("⬇️ Descifrar como backend")

message_json = st.text_area(
    "SecureMessage (JSON)",
    value=st.session_state.get("last_message", ""),
    height=200,
    key="dec_message",
)
verify_signature = st.checkbox("Exigir firma del cliente", value=False)

if st.button("Descifrar", key="btn_decrypt", disabled=not message_json.strip()):
    ok, msg, plaintext, dbg = decrypt_on_backend(message_json, verify_signature=verify_signature)
    if ok:
        st.success(msg)
        st.code(dbg)
        st.markdown("### Mensaje recuperado")
        st.code(plaintext)
    else:
        st.error(msg)
