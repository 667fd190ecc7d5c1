from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
import re

app = FastAPI(title="Mock Categorization Server", version="1.0.0")

ESSENTIAL_WORDS = ("wipes", "sanitizer", "toothpaste", "paper towels", "soap", "milk", "bread", "diapers")

# Stands in for the chat model: reads the item out of the classification prompt
ITEM_PATTERN = re.compile(r'Item: "(?P<item>[^"]*)"')


class ChatRequest(BaseModel):
    message: str


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/api/chat")
def chat(body: ChatRequest):
    match = ITEM_PATTERN.search(body.message)
    if not match:
        raise HTTPException(status_code=400, detail="no item in prompt")
    item = match.group("item").lower()
    if "broken" in item:
        return {"response": "NOT_A_CATEGORY"}
    if any(word in item for word in ESSENTIAL_WORDS):
        return {"response": "ESSENTIAL_DAILY"}
    return {"response": "DISCRETIONARY_SMALL"}
