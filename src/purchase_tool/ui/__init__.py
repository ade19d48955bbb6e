"""UI subpackage - Streamlit purchase builder."""
