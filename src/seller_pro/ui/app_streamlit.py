"""
Streamlit UI for the SellerPro listing workspace.

Features:
- Home dashboard with shortcuts into the listing builder
- Pricing form with live listing price, GST and fee breakdown
- Price composition chart
- AI content optimizer (title, keywords, description, features)
"""
import streamlit as st
import pandas as pd
import plotly.express as px
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from seller_pro import __version__
from seller_pro.engine import PricingEngine
from seller_pro.config.settings import get_settings
from seller_pro.services.content_service import (
    ContentGenerator,
    ContentGenerationError,
)


st.set_page_config(
    page_title="SellerPro",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine()


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    return get_settings()


try:
    engine = get_engine()
    settings = get_settings_cached()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()

currency = settings.currency_symbol

# Settlement, Shipping, Fees, GST
PIE_COLORS = ["#3b82f6", "#10b981", "#f59e0b", "#ef4444"]

FORM_FIELDS = [
    ('target_net_settlement', f"Target Net Settlement ({currency})"),
    ('gst_percentage', "GST %"),
    ('shipping_charges', f"Shipping {currency}"),
    ('platform_fee_percentage', "Platform Fee %"),
    ('fixed_fee', f"Fixed Fee {currency}"),
]

# One generator per browser session so the in-progress lock is per user
if 'generator' not in st.session_state:
    st.session_state.generator = ContentGenerator(settings)
if 'fee_config' not in st.session_state:
    st.session_state.fee_config = engine.default_configuration()
if 'generated' not in st.session_state:
    st.session_state.generated = None
if 'generation_error' not in st.session_state:
    st.session_state.generation_error = None
if 'active_view' not in st.session_state:
    st.session_state.active_view = "Home"


# ============================================================================
# CUSTOM CSS & STYLING
# ============================================================================
st.markdown("""
    <style>
        .block-container {
            padding-top: 2rem;
            padding-bottom: 2rem;
        }
        h1 {
            font-family: 'Helvetica Neue', Helvetica, Arial, sans-serif;
            font-weight: 700;
        }
        .stMetric {
            background-color: #eff6ff;
            padding: 10px;
            border-radius: 5px;
            border-left: 5px solid #2563eb;
        }
        [data-testid="stSidebar"] {
            background-color: #f8fafc;
        }
    </style>
""", unsafe_allow_html=True)


def open_listing_builder():
    st.session_state.active_view = "Listing Builder"


# ============================================================================
# SIDEBAR: Navigation
# ============================================================================
with st.sidebar:
    st.header("🧮 SellerPro")
    st.radio("Navigate", ["Home", "Listing Builder"], key="active_view", label_visibility="collapsed")

    st.divider()

    if st.session_state.generator.configured:
        st.success(f"✨ **AI Content Active** ({settings.openai_model})")
    else:
        st.warning("⚠️ AI content disabled - set OPENAI_API_KEY")

    st.caption(f"v{__version__} | {datetime.now().strftime('%Y-%m-%d')}")


# ============================================================================
# VIEW: HOME DASHBOARD
# ============================================================================
def render_dashboard():
    st.title("Seller Dashboard")
    st.caption("Create high-converting e-commerce listings in seconds.")

    m1, m2 = st.columns(2)
    m1.metric("Current Margin Target", f"{currency}{st.session_state.fee_config.target_net_settlement:,.0f}")
    m2.metric("Active Drafts", 1 if st.session_state.generated else 0)

    with st.container(border=True):
        st.subheader("Ready to list something new?")
        st.write("Calculate your exact profits and generate SEO titles, descriptions, and keywords using AI.")
        st.button("🧮 Launch Listing Builder", type="primary", on_click=open_listing_builder)

    st.subheader("Quick Shortcuts")
    c1, c2 = st.columns(2)
    with c1:
        st.button("✨ Generate Title & Keywords", use_container_width=True, on_click=open_listing_builder)
        st.caption("SEO optimize your product")
    with c2:
        st.button(f"{currency} Calculate Listing Price", use_container_width=True, on_click=open_listing_builder)
        st.caption("Know your net settlement")


# ============================================================================
# VIEW: LISTING BUILDER
# ============================================================================
def render_pricing_column():
    with st.container(border=True):
        st.subheader(f"{currency} Pricing Engine")

        config = st.session_state.fee_config
        for name, label in FORM_FIELDS:
            value = st.number_input(label, value=float(getattr(config, name)), step=1.0, key=f"fee_{name}")
            config = engine.update_configuration(config, name, value)
        st.session_state.fee_config = config

        result = engine.calculate(config)
        validation = engine.validate(config)

        st.metric("List This Product At", f"{currency}{result.listing_price:,}")
        g1, g2 = st.columns(2)
        g1.caption(f"**GST PORTION:** {currency}{result.gst_amount:,}")
        g2.caption(f"**TOTAL FEES:** {currency}{result.total_fees:,}")

        for error in validation.errors:
            st.error(error)
        for warning in validation.warnings + result.warnings:
            st.warning(warning)

        with st.expander("🔍 Calculation Details"):
            for t in result.trace:
                if t.value:
                    st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
                else:
                    st.caption(f"**{t.step}**: {t.description}")

    with st.container(border=True):
        st.markdown("##### Price Composition")
        composition = engine.price_composition(config, result)
        chart_df = pd.DataFrame(
            # Pie slices cannot be negative
            [{'Component': c.name, 'Amount': max(c.value, 0)} for c in composition]
        )
        fig = px.pie(
            chart_df,
            names='Component',
            values='Amount',
            hole=0.55,
            color_discrete_sequence=PIE_COLORS,
        )
        fig.update_layout(margin=dict(t=10, b=10, l=10, r=10), height=260)
        st.plotly_chart(fig, use_container_width=True)


def render_content_column():
    generator = st.session_state.generator

    with st.container(border=True):
        st.subheader("✨ AI Content Optimizer")

        short_desc = st.text_area(
            "Tell us what you're selling",
            height=110,
            placeholder="Example: High-quality noise cancelling headphones with 20h battery, over-ear style, matte black finish.",
            key="short_desc"
        )

        disabled = generator.in_progress or not short_desc.strip() or not generator.configured
        if st.button("✨ Generate Optimized Content", type="primary", disabled=disabled, use_container_width=True):
            st.session_state.generation_error = None
            with st.spinner("Analyzing product..."):
                try:
                    st.session_state.generated = generator.generate(short_desc)
                except (ValueError, ContentGenerationError) as e:
                    st.session_state.generation_error = str(e)

        if st.session_state.generation_error:
            st.error(st.session_state.generation_error)

        content = st.session_state.generated
        if content:
            st.markdown("###### 🏷️ Recommended Product Title")
            st.code(content.title, language=None)

            st.markdown("###### SEO Search Keywords")
            st.markdown(" ".join(f"`{k}`" for k in content.keywords))

            st.markdown("###### Store Description")
            st.code(content.long_description, language=None, wrap_lines=True)

            st.markdown("###### Bullet Features")
            for feature in content.features:
                st.markdown(f"✅ {feature}")


def render_listing_builder():
    st.title("Listing Builder")
    st.caption("Listing Optimization Workspace")

    col1, col2 = st.columns([1, 1.4], gap="large")
    with col1:
        render_pricing_column()
    with col2:
        render_content_column()


if st.session_state.active_view == "Listing Builder":
    render_listing_builder()
else:
    render_dashboard()
