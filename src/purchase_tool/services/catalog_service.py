"""
Catalog Service - tabular views of packages, variants and quotes.

Used by the API catalog endpoint and the Streamlit UI.
"""
import pandas as pd

from ..engine.models import Package, Quote

PACKAGE_COLUMNS = [
    'Name', 'Description', 'Cost', 'Cost (cents)', 'Active', 'Configurable',
    'Variants', 'Defaults',
]
VARIANT_COLUMNS = ['Code', 'Name', 'Type', 'Cost', 'Cost (cents)', 'Default']


def packages_frame(packages: list[Package]) -> pd.DataFrame:
    """One row per package, indexed by package code."""
    rows = [
        {
            'Code': p.code,
            'Name': p.name,
            'Description': p.description,
            'Cost': p.cost_in_cents / 100.0,
            'Cost (cents)': p.cost_in_cents,
            'Active': p.active,
            'Configurable': p.configurable,
            'Variants': len(p.variants),
            'Defaults': len(p.default_variants),
        }
        for p in packages
    ]
    df = pd.DataFrame(rows, columns=['Code'] + PACKAGE_COLUMNS)
    return df.set_index('Code')


def variants_frame(package: Package) -> pd.DataFrame:
    """One row per catalog variant of a package, in catalog order."""
    rows = [
        {
            'Code': v.code,
            'Name': v.name,
            'Type': v.variant_type,
            'Cost': v.cost_in_cents / 100.0,
            'Cost (cents)': v.cost_in_cents,
            'Default': v.default,
        }
        for v in package.variants
    ]
    return pd.DataFrame(rows, columns=VARIANT_COLUMNS)


def quote_lines_frame(quote: Quote) -> pd.DataFrame:
    """Priced lines of a quote; default variants show the default they cover."""
    rows = [
        {
            'Code': line.code,
            'Name': line.name,
            'Kind': line.kind,
            'Cost': line.cost_in_cents / 100.0,
            'Included': line.default,
            'Covers': line.default_code or '',
        }
        for line in quote.lines
    ]
    return pd.DataFrame(rows, columns=['Code', 'Name', 'Kind', 'Cost', 'Included', 'Covers'])
