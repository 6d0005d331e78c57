# --------------------------------------------------------------
# File: 1_Claves.py
# Description: Genera el par RSA del backend y muestra el handoff público.
# --------------------------------------------------------------

import json
import os

import streamlit as st

from api.services import backend_handoff_path, generate_backend_keys

st.title("🔑 Claves del backend")

if st.button("Generar par RSA", key="btn_keygen"):
    ok, msg, dbg = generate_backend_keys()
    if ok:
        st.success(msg)
        st.code(dbg)
    else:
        st.error(msg)

# Muestra el documento que se distribuye a los clientes (nunca la clave privada).
handoff_path = backend_handoff_path()
if os.path.exists(handoff_path):
    with open(handoff_path, "r", encoding="utf-8") as handler:
        document = json.load(handler)
    st.markdown("### Handoff público")
    st.json(document)
    st.download_button(
        "Descargar handoff",
        data=json.dumps(document, indent=2),
        file_name=os.path.basename(handoff_path),
        mime="application/json",
    )
else:
    st.warning("Todavía no se ha publicado ninguna clave del backend.")
