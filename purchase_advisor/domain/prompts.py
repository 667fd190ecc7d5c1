"""Category-specific prompts for the summary rewrite step"""

from purchase_advisor.domain.models import PurchaseCategory

RESPONSE_FORMAT = 'Provide your response as a JSON object with a single key: "refinedSummary".'


def _base_context(initial_summary: str, decision: str) -> str:
    return f'The final decision is: **{decision}**.\n\nThe initial summary is: "{initial_summary}".'


def prompt_for_category(category, initial_summary: str, decision: str) -> str:
    """
    Build the rewrite prompt for a spend category.

    Every template restates the decision so the rewrite supports it rather
    than changing it. Categories without a dedicated template, including
    DISCRETIONARY_MEDIUM, use the DISCRETIONARY_SMALL one.
    """
    context = _base_context(initial_summary, decision)

    if category == PurchaseCategory.ESSENTIAL_DAILY:
        return (
            "You are a practical advisor for everyday essentials. Your goal is to provide quick, actionable advice.\n\n"
            f"{context}\n\n"
            f"Please refine this summary to be conversational and practical, ensuring it clearly supports the final "
            f"**{decision}** decision. Keep it strictly to two sentences maximum - be concise and direct. Focus on "
            "practical considerations rather than complex financial analysis.\n\n"
            f"{RESPONSE_FORMAT}"
        )

    if category == PurchaseCategory.HIGH_VALUE:
        return (
            "You are a comprehensive financial advisor specializing in significant purchases. Your goal is to "
            "provide detailed analytical treatment with thorough reasoning.\n\n"
            f"{context}\n\n"
            f"Please refine this summary to provide a comprehensive financial analysis that clearly supports the "
            f"final **{decision}** decision. Include detailed reasoning about the financial implications, long-term "
            "value considerations, and strategic thinking. Be thorough and analytical while remaining "
            "conversational. Provide 4-6 sentences of detailed insight.\n\n"
            f"{RESPONSE_FORMAT}"
        )

    return (
        "You are a behavioral finance advisor focused on smart spending habits. Your goal is to provide "
        "cost-benefit analysis with gentle behavioral nudges.\n\n"
        f"{context}\n\n"
        f"Please refine this summary to include a brief cost-benefit perspective and a subtle behavioral insight "
        f"that supports the final **{decision}** decision. Keep it conversational and include a gentle nudge "
        "about spending habits. Limit to 3-4 sentences.\n\n"
        f"{RESPONSE_FORMAT}"
    )
