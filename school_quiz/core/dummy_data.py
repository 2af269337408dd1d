# school_quiz/core/dummy_data.py
from typing import List, Dict, Any

# Offline question templates used when the AI service is unavailable
DUMMY_QUESTIONS: Dict[str, List[Dict[str, Any]]] = {
    "Mathematics": [
        {"text": "What is 7 × 8?", "options": ["54", "56", "64", "48"], "correctAnswer": 1},
        {"text": "Which fraction is equal to 0.5?", "options": ["1/3", "2/5", "1/2", "3/4"], "correctAnswer": 2},
        {"text": "What is the perimeter of a square with sides of 6 cm?", "options": ["12 cm", "36 cm", "18 cm", "24 cm"], "correctAnswer": 3},
        {"text": "Which number is a prime number?", "options": ["13", "15", "21", "27"], "correctAnswer": 0},
        {"text": "What is 144 ÷ 12?", "options": ["11", "12", "14", "10"], "correctAnswer": 1},
        {"text": "How many degrees are in a right angle?", "options": ["45", "180", "90", "60"], "correctAnswer": 2},
    ],
    "Science": [
        {"text": "What gas do plants absorb from the air for photosynthesis?", "options": ["Oxygen", "Carbon dioxide", "Nitrogen", "Hydrogen"], "correctAnswer": 1},
        {"text": "What is the boiling point of water at sea level?", "options": ["90 °C", "50 °C", "100 °C", "120 °C"], "correctAnswer": 2},
        {"text": "Which planet is closest to the Sun?", "options": ["Mercury", "Venus", "Earth", "Mars"], "correctAnswer": 0},
        {"text": "Which organ pumps blood around the body?", "options": ["Lungs", "Liver", "Kidney", "Heart"], "correctAnswer": 3},
        {"text": "What force pulls objects toward the Earth?", "options": ["Magnetism", "Gravity", "Friction", "Tension"], "correctAnswer": 1},
    ],
    "English": [
        {"text": "Which word is a noun?", "options": ["Quickly", "Beautiful", "Table", "Run"], "correctAnswer": 2},
        {"text": "What is the plural of 'child'?", "options": ["Childs", "Children", "Childes", "Childrens"], "correctAnswer": 1},
        {"text": "Which sentence is written in the past tense?", "options": ["She walks home.", "She will walk home.", "She is walking home.", "She walked home."], "correctAnswer": 3},
        {"text": "Which word is a synonym for 'happy'?", "options": ["Joyful", "Angry", "Tired", "Quiet"], "correctAnswer": 0},
        {"text": "What punctuation mark ends a question?", "options": ["Full stop", "Comma", "Question mark", "Colon"], "correctAnswer": 2},
    ],
    "History": [
        {"text": "Which ancient civilization built the pyramids of Giza?", "options": ["Romans", "Egyptians", "Greeks", "Vikings"], "correctAnswer": 1},
        {"text": "In which year did World War II end?", "options": ["1918", "1939", "1945", "1950"], "correctAnswer": 2},
        {"text": "Who was the first person to walk on the Moon?", "options": ["Neil Armstrong", "Yuri Gagarin", "Buzz Aldrin", "John Glenn"], "correctAnswer": 0},
        {"text": "What was the name of the ship that brought the Pilgrims to America in 1620?", "options": ["Santa Maria", "Endeavour", "Titanic", "Mayflower"], "correctAnswer": 3},
        {"text": "Which empire was ruled by Julius Caesar?", "options": ["Ottoman", "Roman", "Persian", "Mongol"], "correctAnswer": 1},
    ],
    "Geography": [
        {"text": "What is the largest ocean on Earth?", "options": ["Atlantic", "Indian", "Pacific", "Arctic"], "correctAnswer": 2},
        {"text": "Which continent is Kenya in?", "options": ["Africa", "Asia", "South America", "Europe"], "correctAnswer": 0},
        {"text": "What is the capital of Japan?", "options": ["Seoul", "Beijing", "Osaka", "Tokyo"], "correctAnswer": 3},
        {"text": "Which river is the longest in the world?", "options": ["Amazon", "Nile", "Yangtze", "Mississippi"], "correctAnswer": 1},
        {"text": "What line divides the Earth into northern and southern hemispheres?", "options": ["Prime Meridian", "Tropic of Cancer", "Equator", "Arctic Circle"], "correctAnswer": 2},
    ],
    "Computer Science": [
        {"text": "What does CPU stand for?", "options": ["Central Processing Unit", "Computer Power Unit", "Central Program Utility", "Core Processing Utility"], "correctAnswer": 0},
        {"text": "Which number system uses only 0 and 1?", "options": ["Decimal", "Binary", "Hexadecimal", "Octal"], "correctAnswer": 1},
        {"text": "What is an algorithm?", "options": ["A type of computer", "A programming language", "A step-by-step set of instructions", "A storage device"], "correctAnswer": 2},
        {"text": "Which of these is an input device?", "options": ["Monitor", "Printer", "Speaker", "Keyboard"], "correctAnswer": 3},
        {"text": "How many bits are in one byte?", "options": ["4", "8", "16", "2"], "correctAnswer": 1},
    ],
}

def get_dummy_questions(subject: str, question_count: int, offset: int = 0) -> List[Dict[str, Any]]:
    """Cycle through the subject's templates to produce question_count raw items"""
    templates = DUMMY_QUESTIONS.get(subject) or DUMMY_QUESTIONS["Mathematics"]

    items = []
    for i in range(question_count):
        template = templates[(offset + i) % len(templates)]
        items.append({
            "text": template["text"],
            "options": list(template["options"]),
            "correctAnswer": template["correctAnswer"],
        })

    return items
