"""Prompt templates for every AI-backed marketplace operation."""

from __future__ import annotations

import json

from app.models.enums import IntentCategory

REGULATORY_CONTEXT = """
REGULATORY CONTEXT (INDIA 2025):
1. DELHI NCR: diesel vehicles older than 10 years and petrol older than 15 years are banned (NGT order).
   Contracts need an early-termination or asset-relocation clause and an accelerated depreciation schedule.
2. MAHARASHTRA: corporate registration tax is a flat 20% (individuals ~11-13%); corporate leases must
   account for the 7-9% differential. 1% cess on CNG vehicles.
3. KARNATAKA: road tax 13-18% plus 11% infrastructure cess. 10% lifetime tax on EVs above 25 Lakh (2025).
   30-day rule for out-of-state vehicles requires a transfer clause.
4. TELANGANA: 2% surcharge on a second vehicle registered in the same name. EV road tax exemption continues.
5. UTTAR PRADESH: hybrid/EV waivers are conditional. Scrappage policy gives 75% exemption on arrears and a
   15-25% road tax rebate against a certificate of deposit.
6. WEST BENGAL: tax by engine CC slab. 5-year vs lifetime tax option; contracts must track tax renewal.
7. GENERAL / BH SERIES: dealer "handling charges" are illegal (Supreme Court); contracts must warrant
   against hidden fees. BH series for employees with offices in 4+ states, taxed every 2 years (8-12%).

PURCHASE AGREEMENT PRACTICE:
A. Financing must disclose APR, finance charge, amount financed and total of payments.
B. Itemise cash price, down payment (cash + trade-in - payoff), amounts paid to others, total financed.
C. Trade-in certification: title not salvaged, airbags intact, odometer and emissions unmodified.
D. Warranty: explicit AS-IS statement if the dealer gives none; reference the manufacturer warranty;
   documentary fee notice.
"""

_CATEGORIES = ", ".join(member.value for member in IntentCategory)


def _dump(value: object) -> str:
    return json.dumps(value, ensure_ascii=True, default=str)


def render_intent_prompt(context: dict) -> str:
    return f"""
Analyze user input: "{context.get('user_input', '')}"
Tasks:
1. Classify into ONE category: {_CATEGORIES}.
2. Extract lifestyle tags.
3. Suggest vehicle features.
4. Extract the maximum budget in Indian Rupees if mentioned. Understand 'Lakh', 'Cr', 'Crore'.
   "15 Lakh" -> 1500000, "1.5 Cr" -> 15000000, "500000" -> 500000. No budget -> 0.
5. Extract the minimum seats required from the number of people. Not specified -> 0.
Output JSON: {{"category": string, "lifestyle_patterns": [string], "recommended_features": [string],
"detected_budget": number, "min_seats": number}}
"""


def render_contract_variables_prompt(context: dict) -> str:
    return f"""
Analyze this vehicle sales contract template and list the placeholders the BUYER must provide.
TEMPLATE:
\"\"\"{context.get('template', '')}\"\"\"
Rules:
1. Look for placeholders like {{{{buyer_name}}}}, {{{{address}}}}, {{{{phone}}}}.
2. Ignore placeholders the seller should have filled (e.g. [VIN], [WARRANTY_DATE]).
3. Never ask for driving licence, passport or ID proof numbers.
Output JSON: {{"fields": ["Full Name", "Residential Address"]}}
"""


def render_seller_placeholders_prompt(context: dict) -> str:
    return f"""
Analyze this contract template and list the placeholders the SELLER must fill before saving it.
TEMPLATE:
\"\"\"{context.get('template', '')}\"\"\"
Rules:
1. Look for placeholders like [VIN], [DATE], [WARRANTY_PERIOD], [DEALER_LICENSE], [STOCK_NO], [PRICE], [MILEAGE], [COLOR].
2. Do not include buyer placeholders such as {{{{buyer_name}}}} or {{{{address}}}}.
3. Return distinct labels.
Output JSON: {{"seller_fields": ["VIN Number", "Warranty Duration (Months)", "Today's Date"]}}
"""


def render_fill_seller_variables_prompt(context: dict) -> str:
    return f"""
Fill the SELLER placeholders in this contract template.
TEMPLATE:
\"\"\"{context.get('template', '')}\"\"\"
SELLER INPUTS:
{_dump(context.get('seller_inputs', {}))}
Rules:
1. Replace placeholders like [VIN] and [DATE] with the inputs.
2. Leave every {{{{placeholder}}}} meant for the buyer exactly as is.
3. Return only the updated template and keep its HTML tags.
"""


def render_build_contract_prompt(context: dict) -> str:
    vehicle = context.get("vehicle", {})
    return f"""
Contract completion (final buyer fill).
INPUT TEMPLATE (already filled by seller):
\"\"\"{context.get('template', '')}\"\"\"
BUYER DETAILS:
{json.dumps(context.get('buyer_inputs', {}), indent=2, ensure_ascii=True)}
VEHICLE:
- Model: {vehicle.get('name', '')} {vehicle.get('trim', '')}
- Price: {vehicle.get('price') or 'TBD'}
Instructions:
1. Fill the remaining {{{{buyer_...}}}} and {{{{vehicle_name}}}} placeholders.
2. Format as clean A4-style HTML using <h3>, <p>, <b>, <ul>, <br>; no Markdown.
3. Leave enough vertical spacing between clauses.
Output JSON: {{"final_contract_html": string, "summary": string}}
"""


def render_jurisdiction_prompt(context: dict) -> str:
    region = context.get("region", "General")
    return f"""
Adapt this vehicle sales contract for the jurisdiction: {region}.
{REGULATORY_CONTEXT}
INPUT HTML:
\"\"\"{context.get('contract_html', '')}\"\"\"
Instructions:
1. Modify clauses to comply with {region} rules.
2. Keep all other vehicle and buyer details.
3. Return ONLY the complete updated HTML.
"""


def render_highlight_clauses_prompt(context: dict) -> str:
    text = str(context.get("contract_text", ""))[:2000]
    return f"""
Analyze this automotive contract under {context.get('region', 'General')} jurisdiction law.
{REGULATORY_CONTEXT}
Contract text: "{text}..."
Identify obligations, hidden fees (check for handling charges) and specific regulatory risks.
Output JSON: {{"obligations": [string], "fees_penalties": [string], "risk_level": string}}
"""


def render_seller_template_prompt(context: dict) -> str:
    vehicle = context.get("vehicle", {})
    dealership = context.get("dealership_name") or "Seller Name"
    return f"""
Generate a detailed, professional "Vehicle Sales Agreement" as semantic HTML.
CONTEXT:
- Vehicle: {vehicle.get('name', '')} {vehicle.get('trim', '')} ({vehicle.get('drive', '')})
- Price: [PRICE] (or {vehicle.get('price', '')})
- Seller: {dealership}
- Jurisdiction: {context.get('region', 'General')}
Structure: centred <h2> title; preamble dated [DATE] between {dealership} ("Seller") and {{{{buyer_name}}}} ("Buyer");
background recitals; Article 1 Definitions; Article 2 Purchase and Sale with a price breakdown;
Article 3 The Vehicle with VIN [VIN], mileage [MILEAGE], colour [COLOR]; Article 4 Seller warranties
including an AS-IS disclaimer; Article 5 Buyer representations; Article 6 Covenants; Article 7
Conditions to closing; Article 8 Limitation of liability; Article 9 Miscellaneous; signature blocks;
Exhibit A odometer disclosure.
Seller placeholders: [VIN], [DATE], [PRICE], [MILEAGE], [COLOR].
Buyer placeholders: {{{{buyer_name}}}}, {{{{address}}}}, {{{{phone}}}}.
Return only the raw HTML.
"""


def render_refine_contract_prompt(context: dict) -> str:
    return (
        "Role: legal contract editor.\n"
        f"Current text: \"\"\"{context.get('current_text', '')}\"\"\"\n"
        f"Instruction: \"{context.get('instruction', '')}\"\n"
        "Return ONLY the updated text. Keep HTML tags. Do not use markdown."
    )


def render_contract_assistant_prompt(context: dict) -> str:
    return f"""
You are a legal assistant helping a car buyer understand their contract.
Contract text: \"\"\"{context.get('contract_text', '')}\"\"\"
Question: "{context.get('question', '')}"
Tasks:
1. Answer clearly from the contract text.
2. Quote one SHORT phrase (10-15 words max) from the contract that supports the answer.
3. The quote MUST appear character-for-character in the text. Do not paraphrase it.
Output JSON: {{"answer": string, "citation_quote": string}}
"""


def render_compliance_prompt(context: dict) -> str:
    return f"""
Verify contract revision compliance.
Buyer's request: "{context.get('request', '')}"
Original contract text:
\"\"\"{context.get('original_text', '')}\"\"\"
Revised contract text:
\"\"\"{context.get('revised_text', '')}\"\"\"
Decide whether the revision reasonably satisfies the buyer's request compared to standard automotive terms.
Output JSON: {{"satisfied": boolean, "reason": string}}
"""


def render_account_validation_prompt(context: dict) -> str:
    return f"""
Validate a marketplace registration.
Inputs: Name="{context.get('name', '')}", Email="{context.get('email', '')}", Role="{context.get('role', '')}",
Dealership="{context.get('dealership_name') or ''}".
Rules: 1. Email must be a valid format. 2. Sellers need a dealership name longer than 3 characters.
Output JSON: {{"is_valid": boolean, "reasons": [string], "risk_score": number between 0 and 1, "recommended_fix": string}}
"""


def render_insurance_needs_prompt(context: dict) -> str:
    intent = context.get("intent", {})
    tags = ", ".join(intent.get("lifestyle_patterns") or []) or "General"
    return f"""
Recommend the best insurance plan for this buyer from the available plans.
Buyer profile:
- Category: {intent.get('category', 'General')}
- Lifestyle tags: {tags}
- Budget limit: {intent.get('detected_budget') or 'Unknown'}
Available plans:
{_dump(context.get('plans', []))}
Select ONE plan and explain why in one sentence.
Output JSON: {{"recommendedPlanId": string, "reason": string}}
"""


def render_insurance_agent_prompt(context: dict) -> str:
    return f"""
System: you are an expert motor insurance agent.
The buyer is looking at these plans:
{_dump(context.get('plans', []))}
Question: "{context.get('question', '')}"
Answer with reference to the plans, compare premiums and coverage when asked, explain terms like
Zero Dep, IDV and RTI simply. Be concise.
"""


def render_analytics_chat_prompt(context: dict) -> str:
    return f"""
System: you are an assistant for a car dealership dashboard.
Data context: {_dump(context.get('data', {}))}
Question: "{context.get('question', '')}"
Answer in under 50 words using only the data context.
"""


DEFAULT_PROMPT_REGISTRY = {
    "intent.classify": render_intent_prompt,
    "contract.variables": render_contract_variables_prompt,
    "contract.seller_placeholders": render_seller_placeholders_prompt,
    "contract.fill_seller": render_fill_seller_variables_prompt,
    "contract.build": render_build_contract_prompt,
    "contract.jurisdiction": render_jurisdiction_prompt,
    "contract.highlight": render_highlight_clauses_prompt,
    "contract.seller_template": render_seller_template_prompt,
    "contract.refine": render_refine_contract_prompt,
    "contract.assistant": render_contract_assistant_prompt,
    "contract.compliance": render_compliance_prompt,
    "account.validate": render_account_validation_prompt,
    "insurance.recommend": render_insurance_needs_prompt,
    "insurance.agent": render_insurance_agent_prompt,
    "analytics.chat": render_analytics_chat_prompt,
}


VISUAL_PROMPT_VARIANTS = (
    "Photorealistic image of the specific car provided in the reference image, placed in a {context} environment. "
    "{modification}Maintain the exact car model and color unless modified. Car: {subject}.",
    "Side profile view of the referenced car driving in {context}. {modification}Cinematic lighting. Car: {subject}.",
    "Rear view of the same car parked in {context}. {modification}High quality. Car: {subject}.",
    "Detail shot of the car in {context}. {modification}Car: {subject}.",
)


def render_visual_prompts(context: dict) -> list[str]:
    """One prompt per visualizer camera angle."""
    modification = context.get("modification")
    values = {
        "context": context.get("context") or "studio",
        "modification": f"MODIFICATION: {modification}. " if modification else "",
        "subject": context.get("visual_desc") or context.get("vehicle_name", ""),
    }
    return [variant.format(**values) for variant in VISUAL_PROMPT_VARIANTS]
