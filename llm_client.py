"""
LLM Client for the RIS research assistant using Groq API with function calling.
"""
import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from groq import Groq

from tools import TOOLS, execute_tool, format_tool_call_args

load_dotenv(override=True)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.3-70b-versatile"
MAX_TOOL_ITERATIONS = 3

# System prompt for the research assistant
# Reference:
# - https://console.groq.com/docs/tool-use/overview
# - https://data.bka.gv.at/ris/api/v2.6/
SYSTEM_PROMPT = """You are an AI-enabled research assistant for Austrian law, working on the
official Rechtsinformationssystem des Bundes (RIS).

## TOOLS

- `ris_bundesrecht`: federal laws (ABGB, StGB, UGB, ...). Use `titel` for the law's
  short title and `paragraph` for a specific section.
- `ris_landesrecht`: state laws; set `bundesland` when the user names a state.
- `ris_judikatur`: court decisions; pick `gericht` (Justiz = OGH/OLG/LG/BG, Vfgh,
  Vwgh, Bvwg, Lvwg, Dsk, ...). Use `geschaeftszahl` for a known case number and
  `norm` for decisions on a provision ("1319a ABGB").
- `ris_dokument`: full text of one document by its `dokumentnummer` from a search
  result. Always prefer this over a broader search when the number is known.
- `ris_bezirke`: announcements of district authorities (Bezirkshauptmannschaften).
- `ris_gemeinden`: municipal law; `applikation` Gr (law) or GrA (gazettes).
- `ris_sonstige`: miscellaneous collections; `applikation` is required (Erlaesse,
  Mrp, Upts, KmGer, Avsv, Avn, Spg, PruefGewO).
- `ris_history`: what changed in a collection between `aenderungen_von` and
  `aenderungen_bis`.

## RULES

1. Search first, then answer from the returned documents only.
2. Cite documents as they appear in the results (e.g. "§ 1319a ABGB",
   "OGH 5 Ob 123/23t", "VfGH 01.01.2024, E 123/2024") and give the Dokumentnummer.
3. If the results say more pages are available, offer to fetch `seite` + 1.
4. If a tool returns an error, explain it briefly and suggest a narrower query.
5. Answer in the language of the user's question.

## YOUR PERSONA

- Experienced Austrian lawyer, precise with citations
- Never invent provisions, dates or case numbers
- This is research support, not legal advice
"""


class LLMClient:
    """Client for interacting with a Groq LLM that calls the RIS tools."""

    def __init__(self, model: Optional[str] = None):
        """
        Initialize the Groq LLM client.

        Args:
            model: Optional model name. Defaults to GROQ_MODEL or DEFAULT_MODEL
        """
        api_key = os.getenv("GROQ_API_KEY")
        self.chat_history: List[Dict[str, Any]] = []
        if not api_key:
            self.client = None
            self.model = None
            return

        self.client = Groq(api_key=api_key)
        self.model = model or os.getenv("GROQ_MODEL", DEFAULT_MODEL)
        self._initialize_chat()

    def _initialize_chat(self):
        """Initialize chat history with system prompt."""
        self.chat_history = [
            {"role": "system", "content": SYSTEM_PROMPT}
        ]

    def reset_chat(self):
        """Reset chat history to start a new conversation."""
        self._initialize_chat()

    def get_welcome_message(self) -> str:
        """Get the initial welcome message from the assistant."""
        if self.client is None:
            return """Servus! Ich bin dein Rechercheassistent fuer das österreichische RIS.

Ich laufe im direkten Modus (ohne KI). Du kannst trotzdem Bundesrecht, Landesrecht und Judikatur durchsuchen.

Fuer die KI-gestuetzte Recherche trage deinen Groq API Key in die .env-Datei ein."""

        return """Servus! Ich bin dein Rechercheassistent fuer das österreichische Recht (RIS).

Beispiele fuer Fragen:
- "Was regelt § 1319a ABGB?"
- "Aktuelle OGH-Entscheidungen zur Wegehalterhaftung"
- "Bauordnung Salzburg, Abstandsvorschriften"
- "Zeig mir das Dokument NOR40052761"

Frag einfach auf Deutsch oder Englisch."""

    def chat(self, user_message: str, ris_client=None) -> Dict[str, Any]:
        """
        Process a user message and return the assistant's response.

        Args:
            user_message: The user's input message
            ris_client: RISClient instance for executing tool calls

        Returns:
            Dictionary containing:
            - response: str - The assistant's text response
            - tool_called: bool - Whether a tool was executed
            - tool_calls: List of {"name", "arguments", "success"} for each executed tool
            - search_result: Optional[SearchResult] - Last normalized search result
        """
        result = {
            "response": "",
            "tool_called": False,
            "tool_calls": [],
            "search_result": None,
        }

        if self.client is None:
            result["response"] = "Kein GROQ_API_KEY gesetzt - direkter Suchmodus."
            return result

        # Each question starts from the system prompt; tool output is large
        if len(self.chat_history) > 1:
            self._initialize_chat()

        self.chat_history.append({
            "role": "user",
            "content": user_message
        })

        try:
            for _ in range(MAX_TOOL_ITERATIONS):
                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=self.chat_history,
                    tools=TOOLS,
                    tool_choice="auto",
                    max_tokens=2048,
                    temperature=0.2
                )

                response_message = response.choices[0].message

                # No tool calls - we have a final response
                if not response_message.tool_calls:
                    result["response"] = response_message.content or ""
                    self.chat_history.append({
                        "role": "assistant",
                        "content": result["response"]
                    })
                    break

                result["tool_called"] = True
                self.chat_history.append({
                    "role": "assistant",
                    "tool_calls": [
                        {
                            "id": tc.id,
                            "function": {
                                "name": tc.function.name,
                                "arguments": tc.function.arguments
                            },
                            "type": tc.type
                        }
                        for tc in response_message.tool_calls
                    ]
                })

                for tool_call in response_message.tool_calls:
                    tool_name = tool_call.function.name
                    tool_args = format_tool_call_args(tool_call)
                    logger.info("Tool call %s %s", tool_name, tool_args)

                    tool_result = execute_tool(tool_name, tool_args, ris_client)
                    result["tool_calls"].append({
                        "name": tool_name,
                        "arguments": tool_args,
                        "success": tool_result["success"],
                    })
                    if tool_result.get("search_result") is not None:
                        result["search_result"] = tool_result["search_result"]

                    self.chat_history.append({
                        "role": "tool",
                        "content": tool_result["text"],
                        "tool_call_id": tool_call.id
                    })

            if not result["response"]:
                result["response"] = "Ich konnte keine abschliessende Antwort erstellen. Bitte formuliere die Frage genauer."

            return result

        except Exception as e:
            logger.warning("LLM request failed: %s", e)
            result["response"] = f"Fehler bei der Anfrage an das Sprachmodell: {e}"
            return result
