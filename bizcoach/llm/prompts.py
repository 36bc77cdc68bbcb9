"""Prompt templates for the business coach LLM calls."""

from __future__ import annotations

import json
from typing import Any

COACH_INSTRUCTIONS = (
    "You are an expert business coach helping entrepreneurs with their business journey. "
    "Your goal is to provide practical, actionable advice based on proven business "
    "principles. Always be encouraging but realistic, and focus on helping the user take "
    "concrete next steps.\n\n"
    "When you recommend steps, present them as a numbered or bulleted list so they can be "
    "saved as action items. Never show JSON, code blocks or technical formatting to the user."
)

TITLE_PROMPT = (
    'Generate a concise, descriptive title (max 40 chars) that captures the main topic '
    'from this message: "{message}". Make it clear and specific, avoiding generic phrases. '
    "Reply with the title only."
)

BREAK_EVEN_EXAMPLE: dict[str, Any] = {
    "fixedCosts": {
        "amount": 5000,
        "description": "Monthly fixed costs including rent, salaries, utilities",
    },
    "variableCosts": {"amount": 10, "description": "Variable cost per unit"},
    "unitPrice": 25,
    "contributionMargin": 15,
    "breakEvenPoint": {"units": 334, "revenue": 8350},
    "timeToBreakEven": "3 months based on projected sales of 150 units per month",
    "assumptions": [
        "Sales volume increases by 10% month-over-month",
        "Fixed costs remain constant",
        "No seasonal fluctuations in demand",
    ],
    "sensitivityAnalysis": "If price decreases by 10%, break-even point increases to 445 units.",
}

BREAK_EVEN_HELP = (
    "\nSince the user is asking for help, provide a clear, step-by-step explanation of "
    "break-even analysis:\n"
    "1. Explain what break-even analysis is in simple terms\n"
    "2. Guide them through identifying their fixed costs\n"
    "3. Help them calculate variable costs per unit\n"
    "4. Show how to determine contribution margin\n"
    "5. Explain the formula for break-even point (Fixed costs / Contribution margin)\n"
    "6. Give a simple example they can relate to\n\n"
    "Make your response encouraging and emphasize that this doesn't need to be complex."
)

ACTION_LISTS_SYSTEM_PROMPT = (
    "You are an AI assistant specialized in analyzing business conversations and "
    "extracting structured action lists.\n\n"
    "1. Identify action items, tasks, and steps that need to be completed.\n"
    "2. Focus on ACTIONABLE items: things that can be completed or checked off.\n"
    "3. Organize them into logical lists with meaningful titles based on themes.\n"
    "4. Identify sublists of other lists and set their parent_id to the parent's id.\n\n"
    "Use the store_action_lists tool to return your results. Give every list a unique id, "
    "leave parent_id null for top-level lists, and keep each item a single concise task."
)

ACTION_LISTS_TOOL: dict[str, Any] = {
    "name": "store_action_lists",
    "description": "Store titled action lists extracted from a business conversation.",
    "input_schema": {
        "type": "object",
        "properties": {
            "action_lists": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string", "description": "Unique id for this list."},
                        "title": {"type": "string", "description": "List title."},
                        "items": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Action items, one task each.",
                        },
                        "parent_id": {
                            "type": ["string", "null"],
                            "description": "Id of the parent list, null for top-level lists.",
                        },
                    },
                    "required": ["id", "title", "items"],
                },
            }
        },
        "required": ["action_lists"],
    },
}


def _excerpt(label: str, text: str) -> str:
    return f"- {label}: {text[:200]}..." if text else ""


def build_break_even_prompt(
    existing: dict[str, Any],
    financial_plan: dict[str, Any],
    help_request: bool = False,
) -> str:
    """System prompt for a break-even analysis turn.

    Args:
        existing: Break-even data gathered in earlier turns.
        financial_plan: The plan's ``financialPlan`` section, used for context.
        help_request: Whether the user asked to be walked through the analysis.
    """
    context = "\n".join(
        line
        for line in (
            _excerpt("Startup Costs", str(financial_plan.get("startupCost") or "")),
            _excerpt("Revenue Projections", str(financial_plan.get("revenueProjections") or "")),
            _excerpt("Expense Projections", str(financial_plan.get("expenseProjections") or "")),
        )
        if line
    )

    prompt = (
        "You are an AI assistant helping a business owner create a break-even analysis for "
        "their business plan. Extract structured information about their break-even "
        "analysis and present it clearly. If the user asks for help or seems unsure, guide "
        "them with simple examples and explanations.\n\n"
        "Focus on extracting or helping the user determine:\n"
        "1. Fixed costs per period\n"
        "2. Variable costs per unit\n"
        "3. Price per unit\n"
        "4. Contribution margin per unit (price minus variable cost)\n"
        "5. Break-even point in units and revenue\n"
        "6. Projected time to break even\n"
        "7. Key assumptions made in the analysis\n\n"
        f"Relevant financial data from other sections:\n{context or '- none yet'}\n\n"
        "If the user provides enough information, include a JSON block like this, using "
        "only these keys:\n"
        f"```json\n{json.dumps(BREAK_EVEN_EXAMPLE, indent=2)}\n```\n\n"
        "Include JSON only when you have sufficient information, embedded in a friendly, "
        "conversational response.\n\n"
        f"Existing break-even data (if any):\n{json.dumps(existing, indent=2)}\n"
    )
    if help_request:
        prompt += BREAK_EVEN_HELP
    return prompt


SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise bullet-point summaries of information. "
    "Extract only the key points, important facts, and actionable insights."
)

SUMMARY_PROMPT = (
    "Please create a concise bullet-point summary of the following information.\n"
    "Focus ONLY on extracting the key points, important facts, and actionable insights.\n\n"
    "Guidelines:\n"
    '- Each bullet point should begin with "• " and focus on a single concept\n'
    "- Include only the most important information (max 5-7 bullet points)\n"
    "- Be specific and informative, not vague\n"
    "- Remove any fluff, introductions, or transitions\n"
    "- Include numbers and specific data points when present\n"
    "- DO NOT include explanatory text, instructions, or commentary\n\n"
    "Original content:\n{content}\n\n"
    "Key Points Summary (bullet points):"
)
