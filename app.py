# app.py
import streamlit as st

from decoding import decode
from rsa_utils import generate_keys, rsa_encrypt

st.set_page_config(page_title="RSA Key Recovery Demo", page_icon="🔓", layout="wide")

# ---------------- Session State ----------------
if "toy_keys" not in st.session_state:
    st.session_state.toy_keys = None
if "toy_cipher" not in st.session_state:
    st.session_state.toy_cipher = None
if "decode_res" not in st.session_state:
    st.session_state.decode_res = None

# ---------------- Header ----------------
st.title("🔓 Textbook RSA — Recovering the Decoding Key")
st.caption(
    "Factor the public modulus N on the mod-30 wheel, invert e modulo φ(N) with the "
    "extended Euclidean algorithm, then decrypt c by repeated squaring."
)


def _parse_int(label: str, raw: str):
    try:
        return int(raw.strip())
    except ValueError:
        st.error(f"{label} must be an integer.")
        return None


# ---------------- Toy key panel ----------------
def keygen_panel():
    with st.container():
        st.subheader("🔑 Generate a toy key")
        bits = st.slider("Bits per prime (toy)", 12, 31, 20, help="Larger → slower to factor.")
        seed = st.number_input("Seed (reproducible)", min_value=0, value=42)
        m = st.number_input("Plain text integer m", min_value=0, value=23057)

        if st.button("Generate key & Encrypt", key="toy_gen"):
            keys = generate_keys(bits_per_prime=bits, seed=int(seed))
            st.session_state.toy_keys = keys
            if m >= keys.n:
                st.error(f"m must be smaller than N = {keys.n}.")
                st.session_state.toy_cipher = None
            else:
                st.session_state.toy_cipher = rsa_encrypt(int(m), keys.n, keys.e)

        k = st.session_state.toy_keys
        if k is not None and st.session_state.toy_cipher is not None:
            st.code(f"Public key:\n N = {k.n}\n e = {k.e}")
            st.code(f"Cryptogram:\n c = {st.session_state.toy_cipher}")
            with st.expander("Private key (for checking)"):
                st.code(f"p = {k.p}\nq = {k.q}\nd = {k.d}")


# ---------------- Recovery panel ----------------
def recover_panel():
    with st.container():
        st.subheader("🕵️ Recover the decoding key")
        k = st.session_state.toy_keys
        c = st.session_state.toy_cipher
        default_n = str(k.n) if k is not None else "2870558567"
        default_e = str(k.e) if k is not None else "78157"
        default_c = str(c) if c is not None else "1102754603"

        raw_n = st.text_input("Public keys, N", default_n)
        raw_e = st.text_input("Public keys, e", default_e)
        raw_c = st.text_input("Cryptogram, c", default_c)
        timeout = st.slider("Factoring budget (s)", 1, 60, 10)

        if st.button("Recover key", key="recover"):
            n = _parse_int("N", raw_n)
            e = _parse_int("e", raw_e)
            c = _parse_int("c", raw_c)
            if None not in (n, e, c):
                st.session_state.decode_res = decode(n, e, c, timeout=float(timeout))

        res = st.session_state.decode_res
        if res is None:
            st.info("Enter N, e and c, then click **Recover key**.")
        elif res.aborted:
            st.error(res.reason)
        else:
            c1, c2 = st.columns(2)
            with c1:
                st.metric("p", res.p)
                st.metric("q", res.q)
                st.metric("φ(N)", res.phi)
            with c2:
                st.metric("Decoding key d", res.d)
                st.metric("Plain text m", res.m)
            st.success(f"The decoding key is {res.d}. The plain text is {res.m}.")


# ---------------- Layout ----------------
colA, colB = st.columns(2)
with colA:
    keygen_panel()
with colB:
    recover_panel()

st.caption("Educational demo: tiny keys, no padding. Real RSA moduli are far beyond trial division.")
