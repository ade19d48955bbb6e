"""
Streamlit UI for building and pricing a purchase.

Features:
- Package picker backed by the catalog listing
- Add-on selection from the package's choosable variants
- Coupon, discount and credit inputs
- Quote breakdown with trace and CSV export
"""
import streamlit as st

from purchase_tool.config import configure_logging, get_settings
from purchase_tool.engine import Purchase, PurchaseError
from purchase_tool.gateway import CatalogGateway
from purchase_tool.services.catalog_service import packages_frame, quote_lines_frame, variants_frame


st.set_page_config(
    page_title="Purchase Builder",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_gateway():
    """Get cached gateway instance."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return CatalogGateway(settings)


@st.cache_data(ttl=300)
def load_catalog():
    """Package listing as a DataFrame, refreshed every five minutes."""
    return packages_frame(get_gateway().list_packages())


try:
    gateway = get_gateway()
    catalog = load_catalog()
except (ValueError, PurchaseError) as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SIDEBAR: Purchase Context
# ============================================================================
with st.sidebar:
    st.header("Customer Context")

    with st.container(border=True):
        state = st.text_input("State", value="", placeholder="e.g. CA") or None
        organization = st.text_input("Organization", value="") or None

    st.divider()

    active_only = st.checkbox("Active packages only", value=True)
    choices = catalog[catalog['Active']] if active_only else catalog
    if choices.empty:
        st.warning("No packages in the catalog")
        st.stop()

    package_code = st.selectbox(
        "Package",
        options=choices.index.tolist(),
        format_func=lambda code: f"{code} | {choices.loc[code, 'Name']}",
    )


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Purchase Builder")

try:
    package = gateway.resolve_package(package_code, state=state)
except PurchaseError as e:
    st.error(f"{type(e).__name__}: {e}")
    st.stop()

st.caption(package.description)

col1, col2 = st.columns([1.6, 1.4], gap="large")

with col1:
    st.subheader("Variants")
    st.dataframe(variants_frame(package), hide_index=True, use_container_width=True)

    choosable = [v.code for v in package.choosable_variants]
    selected = st.multiselect("Add-ons", options=choosable)

    with st.container(border=True):
        st.markdown("##### Adjustments")
        coupon_code = st.text_input("Coupon code", value="").strip() or None
        discount = st.number_input("Discount (cents)", min_value=0, value=0, step=100)
        credit = st.number_input("Credit (cents)", min_value=0, value=0, step=100)

with col2:
    st.subheader("Quote Summary")

    try:
        purchase = Purchase(
            package,
            variants=selected,
            coupon_code=coupon_code,
            discount_in_cents=int(discount),
            credit_in_cents=int(credit),
            organization=organization,
            available_in_state=state,
            gateway=gateway,
        )
    except PurchaseError as e:
        st.error(f"{type(e).__name__}: {e}")
        st.stop()

    quote = purchase.quote()

    with st.container(border=True):
        m1, m2 = st.columns(2)
        m1.metric("Subtotal", f"${quote.subtotal:,.2f}")
        m2.metric("Total", f"${quote.total:,.2f}")

        if coupon_code and quote.coupon_code is None:
            st.warning(f"Coupon '{coupon_code}' was not found")
        for warning in quote.warnings:
            st.warning(warning)

        lines_df = quote_lines_frame(quote)
        st.dataframe(lines_df, hide_index=True, use_container_width=True)

        st.download_button(
            "📥 CSV",
            data=lines_df.to_csv(index=False),
            file_name=f"quote_{package.code}.csv",
            mime="text/csv",
            use_container_width=True
        )

    with st.expander("🔍 Pricing Details"):
        for t in quote.trace:
            if t.value:
                st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
            else:
                st.caption(f"**{t.step}**: {t.description}")

st.divider()
st.subheader("Catalog")
st.dataframe(catalog, use_container_width=True)
