"""Shared lesson fixtures."""

import pytest

LESSON = """### Palabra a estudiar:
**子猫** (koneko) - こねこ - gatito

---

### Significado y Contextos de Uso:
**子猫** significa gato pequeño o gatito.
> **¡Dato Curioso!** En Japón hay islas habitadas casi solo por gatos.

---

### Ejemplos Simples para Practicar:
*   子猫が好きです。
*   Koneko ga suki desu.
*   Me gustan los gatitos.

---

### Desglose de Kanjis:
*   **Kanji 1: 子** (ko)
*   **Significado:** niño
*   **Otras palabras con 子:** 子供 (kodomo) niño

*   **Kanji 2: 猫** (neko)
*   **Significado:** gato
*   **Otras palabras con 猫:** 猫舌 (nekojita) sensible al calor

---

### Mini Quiz Interactivo:
Pregunta 1: ¿Qué significa "**子猫**"?
🅰️ Perro
🅱️ Pájaro
🅲️ Pez
🅳️ Gatito ✅

Pregunta 2: ¿Cómo se lee 猫?
🅰️ ✅ neko
🅱️ inu
🅲️ tori
🅳️ sakana

Pregunta 3: ¿Qué significa 子?
🅰️ Niño
🅱️ Casa
🅲️ Agua
🅳️ Fuego
"""

PROMPTS_SECTION = """
--- PROMPTS ---
PROMPT: A small kitten sleeping on a tatami, with the text 子猫 (こねこ) "gatito"

PROMPT: An educational infographic breaking down the kanji 子 and 猫
PROMPT: A girl playing with a kitten in a garden, labeled 子猫 "gatito"
"""


@pytest.fixture
def lesson():
    return LESSON


@pytest.fixture
def raw_response():
    return LESSON + PROMPTS_SECTION
