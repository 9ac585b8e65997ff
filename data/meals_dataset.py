"""Built-in meal catalog seeded into an empty database by `init_db`.

Nutrition for each meal is the sum of its ingredient lines (one base
serving). Tags drive the diet-type filter used by the plan generator.
"""


def _ing(name, amount, unit, calories, protein, carbs, fat, fiber=0.0, sugar=0.0, sodium=0.0):
    return {
        "name": name, "amount": amount, "unit": unit,
        "calories": calories, "protein": protein, "carbs": carbs, "fat": fat,
        "fiber": fiber, "sugar": sugar, "sodium": sodium,
    }


MEALS_DATA = [
    # Breakfasts
    {
        "name": "Oatmeal with Berries and Almond Butter", "category": "breakfast", "cuisine": "american",
        "prep_time": 5, "cook_time": 5, "difficulty": "easy",
        "tags": ["vegetarian", "vegan", "high-fiber"],
        "ingredients": [
            _ing("rolled oats", 80, "g", 303, 10.5, 54, 5.2, fiber=8.0, sugar=0.8, sodium=5),
            _ing("blueberries", 100, "g", 57, 0.7, 14.5, 0.3, fiber=2.4, sugar=10, sodium=1),
            _ing("almond butter", 32, "g", 196, 6.7, 6.0, 17.8, fiber=3.3, sugar=1.4, sodium=2),
            _ing("oat milk", 200, "ml", 90, 2.0, 13.0, 3.0, fiber=1.6, sugar=8.0, sodium=100),
        ],
    },
    {
        "name": "Greek Yogurt Parfait", "category": "breakfast", "cuisine": "mediterranean",
        "prep_time": 5, "cook_time": 0, "difficulty": "easy",
        "tags": ["vegetarian", "mediterranean", "high-protein"],
        "ingredients": [
            _ing("greek yogurt", 250, "g", 243, 22.5, 9.8, 12.5, sugar=9.8, sodium=90),
            _ing("granola", 60, "g", 283, 6.0, 38.0, 12.0, fiber=4.0, sugar=12.0, sodium=20),
            _ing("honey", 15, "g", 46, 0.0, 12.4, 0.0, sugar=12.3, sodium=1),
            _ing("strawberries", 100, "g", 32, 0.7, 7.7, 0.3, fiber=2.0, sugar=4.9, sodium=1),
        ],
    },
    {
        "name": "Spinach and Feta Omelette", "category": "breakfast", "cuisine": "greek",
        "prep_time": 5, "cook_time": 10, "difficulty": "easy",
        "tags": ["vegetarian", "keto", "mediterranean", "low-carb"],
        "ingredients": [
            _ing("eggs", 3, "large", 216, 18.9, 1.1, 14.3, sodium=213),
            _ing("feta", 50, "g", 132, 7.1, 2.0, 10.6, sodium=558),
            _ing("spinach", 60, "g", 14, 1.7, 2.2, 0.2, fiber=1.3, sodium=47),
            _ing("olive oil", 15, "ml", 119, 0.0, 0.0, 13.5),
            _ing("avocado", 100, "g", 160, 2.0, 8.5, 14.7, fiber=6.7, sugar=0.7, sodium=7),
        ],
    },
    {
        "name": "Sweet Potato and Bacon Hash", "category": "breakfast", "cuisine": "american",
        "prep_time": 10, "cook_time": 20, "difficulty": "medium",
        "tags": ["paleo"],
        "ingredients": [
            _ing("sweet potato", 200, "g", 172, 3.2, 40.2, 0.2, fiber=6.0, sugar=8.4, sodium=110),
            _ing("bacon", 40, "g", 216, 14.8, 0.6, 16.8, sodium=750),
            _ing("eggs", 2, "large", 144, 12.6, 0.7, 9.5, sodium=142),
            _ing("bell pepper", 80, "g", 21, 0.8, 4.8, 0.2, fiber=1.7, sugar=3.4, sodium=3),
        ],
    },
    # Lunches
    {
        "name": "Quinoa Chickpea Buddha Bowl", "category": "lunch", "cuisine": "fusion",
        "prep_time": 15, "cook_time": 20, "difficulty": "easy",
        "tags": ["vegetarian", "vegan", "high-fiber"],
        "ingredients": [
            _ing("cooked quinoa", 185, "g", 222, 8.1, 39.4, 3.6, fiber=5.2, sugar=1.6, sodium=13),
            _ing("chickpeas", 150, "g", 246, 13.3, 41.1, 3.9, fiber=11.4, sugar=7.2, sodium=360),
            _ing("tahini", 30, "g", 178, 5.1, 6.4, 16.1, fiber=2.8, sodium=35),
            _ing("kale", 60, "g", 29, 2.6, 5.3, 0.6, fiber=2.4, sodium=32),
        ],
    },
    {
        "name": "Grilled Chicken Mediterranean Salad", "category": "lunch", "cuisine": "mediterranean",
        "prep_time": 15, "cook_time": 15, "difficulty": "easy",
        "tags": ["mediterranean", "paleo", "high-protein"],
        "ingredients": [
            _ing("chicken breast", 180, "g", 297, 55.8, 0.0, 6.5, sodium=133),
            _ing("mixed greens", 100, "g", 20, 1.5, 3.6, 0.2, fiber=2.0, sodium=30),
            _ing("cherry tomatoes", 120, "g", 22, 1.1, 4.7, 0.2, fiber=1.4, sugar=3.2, sodium=6),
            _ing("olive oil", 20, "ml", 159, 0.0, 0.0, 18.0),
            _ing("kalamata olives", 40, "g", 92, 0.4, 2.5, 8.6, fiber=1.3, sodium=600),
        ],
    },
    {
        "name": "Turkey Avocado Whole-Wheat Wrap", "category": "lunch", "cuisine": "american",
        "prep_time": 10, "cook_time": 0, "difficulty": "easy",
        "tags": ["high-protein"],
        "ingredients": [
            _ing("whole wheat tortilla", 1, "large", 210, 6.0, 34.0, 5.0, fiber=5.0, sugar=2.0, sodium=460),
            _ing("turkey breast", 120, "g", 163, 34.8, 0.0, 2.4, sodium=600),
            _ing("avocado", 70, "g", 112, 1.4, 6.0, 10.3, fiber=4.7, sodium=5),
            _ing("cheddar", 30, "g", 121, 7.5, 0.4, 10.0, sodium=190),
        ],
    },
    {
        "name": "Zucchini Noodles with Pesto Shrimp", "category": "lunch", "cuisine": "italian",
        "prep_time": 15, "cook_time": 10, "difficulty": "medium",
        "tags": ["keto", "paleo", "low-carb"],
        "ingredients": [
            _ing("zucchini", 300, "g", 51, 3.6, 9.3, 1.0, fiber=3.0, sugar=7.5, sodium=24),
            _ing("shrimp", 180, "g", 178, 36.5, 2.2, 2.5, sodium=500),
            _ing("basil pesto", 45, "g", 230, 3.0, 3.0, 23.5, fiber=1.0, sodium=390),
            _ing("parmesan", 20, "g", 79, 7.2, 0.6, 5.2, sodium=300),
            _ing("olive oil", 10, "ml", 80, 0.0, 0.0, 9.0),
        ],
    },
    # Dinners
    {
        "name": "Baked Salmon with Roasted Vegetables", "category": "dinner", "cuisine": "nordic",
        "prep_time": 15, "cook_time": 25, "difficulty": "medium",
        "tags": ["paleo", "mediterranean", "keto", "high-protein"],
        "ingredients": [
            _ing("salmon fillet", 200, "g", 416, 40.0, 0.0, 27.0, sodium=120),
            _ing("broccoli", 150, "g", 51, 4.2, 10.0, 0.6, fiber=3.9, sugar=2.6, sodium=50),
            _ing("asparagus", 120, "g", 24, 2.6, 4.7, 0.1, fiber=2.5, sugar=2.3, sodium=2),
            _ing("olive oil", 15, "ml", 119, 0.0, 0.0, 13.5),
        ],
    },
    {
        "name": "Lentil and Vegetable Curry", "category": "dinner", "cuisine": "indian",
        "prep_time": 15, "cook_time": 35, "difficulty": "medium",
        "tags": ["vegetarian", "vegan", "high-fiber"],
        "ingredients": [
            _ing("red lentils", 90, "g", 318, 21.6, 54.0, 1.0, fiber=9.6, sugar=1.8, sodium=5),
            _ing("coconut milk", 100, "ml", 197, 2.0, 2.8, 21.3, sodium=13),
            _ing("cauliflower", 150, "g", 38, 2.9, 7.5, 0.4, fiber=3.0, sugar=2.9, sodium=45),
            _ing("brown rice", 150, "g", 168, 3.9, 35.0, 1.4, fiber=2.7, sodium=8),
        ],
    },
    {
        "name": "Lean Beef Stir-Fry with Rice", "category": "dinner", "cuisine": "chinese",
        "prep_time": 15, "cook_time": 15, "difficulty": "medium",
        "tags": ["high-protein"],
        "ingredients": [
            _ing("sirloin strips", 170, "g", 275, 46.0, 0.0, 9.4, sodium=95),
            _ing("jasmine rice", 160, "g", 208, 4.3, 45.0, 0.4, fiber=0.6, sodium=2),
            _ing("stir-fry vegetables", 150, "g", 50, 2.5, 10.0, 0.3, fiber=3.0, sugar=4.0, sodium=40),
            _ing("soy sauce", 15, "ml", 8, 1.3, 0.8, 0.1, sodium=880),
            _ing("sesame oil", 10, "ml", 88, 0.0, 0.0, 10.0),
        ],
    },
    {
        "name": "Herb Chicken Thighs with Cauliflower Mash", "category": "dinner", "cuisine": "french",
        "prep_time": 10, "cook_time": 35, "difficulty": "medium",
        "tags": ["keto", "paleo", "low-carb"],
        "ingredients": [
            _ing("chicken thighs", 220, "g", 403, 40.0, 0.0, 26.0, sodium=200),
            _ing("cauliflower", 250, "g", 63, 4.8, 12.5, 0.7, fiber=5.0, sugar=4.8, sodium=75),
            _ing("butter", 20, "g", 143, 0.2, 0.0, 16.2, sodium=130),
            _ing("garlic and herbs", 10, "g", 15, 0.6, 3.3, 0.1, sodium=2),
        ],
    },
    # Snacks
    {
        "name": "Hummus with Veggie Sticks", "category": "snack", "cuisine": "mediterranean",
        "prep_time": 5, "cook_time": 0, "difficulty": "easy",
        "tags": ["vegetarian", "vegan", "mediterranean"],
        "ingredients": [
            _ing("hummus", 60, "g", 160, 4.7, 12.0, 10.6, fiber=3.6, sodium=240),
            _ing("carrots", 80, "g", 33, 0.7, 7.7, 0.2, fiber=2.2, sugar=3.8, sodium=55),
            _ing("cucumber", 80, "g", 12, 0.5, 2.9, 0.1, fiber=0.4, sugar=1.3, sodium=2),
        ],
    },
    {
        "name": "Apple with Peanut Butter", "category": "snack", "cuisine": "american",
        "prep_time": 2, "cook_time": 0, "difficulty": "easy",
        "tags": ["vegetarian", "vegan"],
        "ingredients": [
            _ing("apple", 180, "g", 94, 0.5, 25.0, 0.3, fiber=4.3, sugar=18.7, sodium=2),
            _ing("peanut butter", 32, "g", 188, 8.0, 6.0, 16.0, fiber=2.0, sugar=3.0, sodium=150),
        ],
    },
    {
        "name": "Mixed Nuts and Cheese Plate", "category": "snack", "cuisine": "french",
        "prep_time": 3, "cook_time": 0, "difficulty": "easy",
        "tags": ["vegetarian", "keto", "low-carb"],
        "ingredients": [
            _ing("mixed nuts", 35, "g", 214, 6.3, 7.5, 18.9, fiber=2.5, sugar=1.5, sodium=4),
            _ing("aged gouda", 30, "g", 107, 7.5, 0.7, 8.2, sodium=245),
        ],
    },
    # Desserts
    {
        "name": "Dark Chocolate Chia Pudding", "category": "dessert", "cuisine": "fusion",
        "prep_time": 10, "cook_time": 0, "difficulty": "easy",
        "tags": ["vegetarian", "vegan"],
        "ingredients": [
            _ing("chia seeds", 30, "g", 146, 5.0, 12.6, 9.2, fiber=10.3, sodium=5),
            _ing("almond milk", 200, "ml", 30, 1.0, 1.0, 2.5, fiber=0.8, sodium=150),
            _ing("cocoa powder", 10, "g", 23, 2.0, 5.8, 1.4, fiber=3.3, sodium=2),
            _ing("maple syrup", 15, "ml", 52, 0.0, 13.4, 0.0, sugar=12.1, sodium=2),
        ],
    },
]
