"""
Built-in sample catalog: sports knowledge quizzes and kids' workouts.

Same shape as a JSON catalog file (see catalog.load_catalog).
"""

SAMPLE_QUESTIONS = [
    {
        "type": "single_choice",
        "id": "hydration-intake",
        "prompt": "What is the recommended daily water intake for athletes during intense training?",
        "options": ["2-3 liters", "3-4 liters", "4-6 liters", "6-8 liters"],
        "correct": 2,
        "explanation": (
            "Athletes should consume 4-6 liters of water daily during intense training "
            "to maintain proper hydration levels."
        ),
    },
    {
        "type": "multi_select",
        "id": "mental-toughness-components",
        "prompt": "Which of the following are key components of mental toughness? (Select all that apply)",
        "options": [
            "Confidence",
            "Focus under pressure",
            "Resilience",
            "Physical strength",
            "Emotional control",
        ],
        "correct": [0, 1, 2, 4],
        "explanation": (
            "Mental toughness includes confidence, focus under pressure, resilience, and "
            "emotional control. Physical strength is important but not a component of "
            "mental toughness."
        ),
    },
    {
        "type": "true_false",
        "id": "progressive-overload",
        "prompt": "Progressive overload is essential for continuous improvement in training.",
        "correct": True,
        "explanation": (
            "Progressive overload is fundamental to training adaptation. Gradually increasing "
            "training demands forces the body to adapt and improve."
        ),
    },
]


def _quiz(id, title, description, category, difficulty, minutes, threshold):
    return {
        "id": id,
        "title": title,
        "kind": "assessment",
        "description": description,
        "category": category,
        "difficulty": difficulty,
        "time_limit_seconds": minutes * 60,
        "pass_threshold": threshold,
        "items": SAMPLE_QUESTIONS,
    }


def _exercise(id, name, seconds, points, instructions):
    return {
        "type": "exercise",
        "id": id,
        "name": name,
        "duration_seconds": seconds,
        "points": points,
        "instructions": instructions,
    }


SAMPLE_CATALOG = {
    "sessions": [
        _quiz(
            "sports-nutrition",
            "Sports Nutrition Fundamentals",
            "Test your knowledge of proper athletic nutrition and hydration",
            "nutrition", "Beginner", 20, 80,
        ),
        _quiz(
            "mental-toughness",
            "Mental Toughness Assessment",
            "Evaluate your psychological resilience and mental strength",
            "psychology", "Intermediate", 30, 75,
        ),
        _quiz(
            "training-principles",
            "Training Principles Quiz",
            "Master the fundamentals of effective training methodologies",
            "knowledge", "Advanced", 25, 85,
        ),
        _quiz(
            "injury-prevention",
            "Injury Prevention Knowledge",
            "Learn essential injury prevention strategies and techniques",
            "fitness", "Intermediate", 22, 80,
        ),
        _quiz(
            "football-rules",
            "Football Rules & Regulations",
            "Comprehensive test on official football rules and regulations",
            "rules", "Beginner", 15, 75,
        ),
        {
            "id": "morning-energy-boost",
            "title": "Morning Energy Boost",
            "kind": "workout",
            "description": "Start your day with fun movements to wake up your body!",
            "category": "Morning",
            "difficulty": "Easy",
            "calories": 45,
            "items": [
                _exercise("jumping-jacks", "Jumping Jacks", 30, 10,
                          "Jump up and spread your arms and legs wide!"),
                _exercise("arm-circles", "Arm Circles", 20, 8,
                          "Make big circles with your arms like a windmill!"),
                _exercise("march-in-place", "March in Place", 30, 10,
                          "Lift your knees high like you're marching in a parade!"),
                _exercise("stretch-reach", "Stretch Reach", 15, 6,
                          "Reach up to the sky and touch the clouds!"),
            ],
        },
        {
            "id": "animal-adventure",
            "title": "Animal Adventure",
            "kind": "workout",
            "description": "Move like your favorite animals in this fun workout!",
            "category": "Fun",
            "difficulty": "Medium",
            "calories": 60,
            "items": [
                _exercise("bear-crawl", "Bear Crawl", 20, 12,
                          "Walk on your hands and feet like a strong bear!"),
                _exercise("frog-jumps", "Frog Jumps", 30, 15,
                          "Hop around like a happy frog by the pond!"),
                _exercise("crab-walk", "Crab Walk", 25, 13,
                          "Walk sideways with your belly up like a crab!"),
                _exercise("butterfly-stretch", "Butterfly Stretch", 15, 8,
                          "Sit and flap your legs like butterfly wings!"),
                _exercise("snake-slither", "Snake Slither", 20, 10,
                          "Wiggle on your belly like a sneaky snake!"),
            ],
        },
        {
            "id": "dance-party",
            "title": "Dance Party Fun",
            "kind": "workout",
            "description": "Dance and move to the rhythm while getting stronger!",
            "category": "Dance",
            "difficulty": "Easy",
            "calories": 40,
            "items": [
                _exercise("wiggle-dance", "Wiggle Dance", 45, 18,
                          "Wiggle your whole body to the beat!"),
                _exercise("arm-wave", "Arm Wave", 30, 12,
                          "Make waves with your arms like ocean water!"),
                _exercise("hip-shake", "Hip Shake", 30, 12, "Shake your hips side to side!"),
                _exercise("happy-claps", "Happy Claps", 15, 6,
                          "Clap your hands above your head with joy!"),
            ],
        },
        {
            "id": "superhero-training",
            "title": "Superhero Training",
            "kind": "workout",
            "description": "Train like your favorite superhero with these power moves!",
            "category": "Hero",
            "difficulty": "Medium",
            "calories": 55,
            "items": [
                _exercise("superhero-pose", "Superhero Pose", 20, 10,
                          "Stand tall with hands on hips like a hero!"),
                _exercise("flying-lunges", "Flying Lunges", 30, 15,
                          "Step forward and pretend to fly!"),
                _exercise("power-punches", "Power Punches", 25, 13,
                          "Punch the air to fight off the bad guys!"),
                _exercise("hero-jumps", "Hero Jumps", 20, 10,
                          "Jump high like you're leaping tall buildings!"),
                _exercise("shield-block", "Shield Block", 15, 8,
                          "Hold your arms up to block with your invisible shield!"),
            ],
        },
    ]
}
