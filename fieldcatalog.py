# fieldcatalog.py

# Field identifiers for the IRS Form W-4 (2026 revision).
# Identifiers are fully qualified AcroForm names as reported by pypdf.

from types import MappingProxyType

W4_FIELDS = MappingProxyType({
    # Step 1(a)
    "firstName": "topmostSubform[0].Page1[0].Step1a[0].f1_01[0]",
    "lastName": "topmostSubform[0].Page1[0].Step1a[0].f1_02[0]",
    "address": "topmostSubform[0].Page1[0].Step1a[0].f1_03[0]",
    "cityStateZip": "topmostSubform[0].Page1[0].Step1a[0].f1_04[0]",
    # Step 1(c)
    "single": "topmostSubform[0].Page1[0].c1_1[0]",
    "married": "topmostSubform[0].Page1[0].c1_1[1]",
    "hoh": "topmostSubform[0].Page1[0].c1_1[2]",
    # Step 2(c)
    "multipleJobs": "topmostSubform[0].Page1[0].c1_2[0]",
    # Step 3
    "step3a": "topmostSubform[0].Page1[0].Step3_ReadOrder[0].f1_06[0]",
    "step3b": "topmostSubform[0].Page1[0].Step3_ReadOrder[0].f1_07[0]",
    "step3Total": "topmostSubform[0].Page1[0].f1_08[0]",
    # Step 4
    "step4a": "topmostSubform[0].Page1[0].f1_09[0]",
    "step4b": "topmostSubform[0].Page1[0].f1_10[0]",
    "step4c": "topmostSubform[0].Page1[0].f1_11[0]",
})

# The SSN box moved between revisions; the first one present in the document wins.
SSN_FIELD_CANDIDATES = (
    "topmostSubform[0].Page1[0].Step1b[0].f1_05[0]",
    "topmostSubform[0].Page1[0].Step1b[0].f1_04[0]",
    "topmostSubform[0].Page1[0].Step1a[0].f1_05[0]",
    "topmostSubform[0].Page1[0].Step1a[0].f1_04[1]",
    "topmostSubform[0].Page1[0].f1_05[0]",
    "topmostSubform[0].Page1[0].f1_04[0]",
)

# Filing status value -> logical checkbox name in W4_FIELDS
FILING_STATUS_FIELDS = MappingProxyType({
    "single": "single",
    "mfs": "single",
    "married": "married",
    "widow": "married",
    "head": "hoh",
})

# CalcResults attribute -> logical text field name in W4_FIELDS, in form order
CALC_FIELDS = (
    ("children_credit", "step3a"),
    ("other_credit", "step3b"),
    ("total_credits", "step3Total"),
    ("other_income", "step4a"),
    ("deductions", "step4b"),
    ("extra_withholding", "step4c"),
)
