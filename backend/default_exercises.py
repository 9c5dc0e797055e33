"""Built-in exercise library seeded into an empty catalog.

Each entry is ``(id, name, category, default rest in seconds)``.
"""

DEFAULT_EXERCISES = [
    (75, "Ab Wheel Rollout", "Abs", 60),
    (26, "Arnold Press", "Anterior Deltoid", 90),
    (1, "Barbell Bench Press", "Chest", 120),
    (34, "Barbell Curl", "Biceps", 90),
    (64, "Barbell Hip Thrust", "Glutes", 120),
    (14, "Barbell Row", "Lats", 120),
    (21, "Barbell Shrug", "Traps", 60),
    (79, "Barbell Side Bend", "Abs", 60),
    (51, "Barbell Squat", "Quadriceps", 180),
    (55, "Bulgarian Split Squat", "Quadriceps", 90),
    (74, "Cable Crunch", "Abs", 60),
    (7, "Cable Crossover", "Chest", 60),
    (37, "Cable Curl", "Biceps", 60),
    (81, "Cable Hip Abduction", "Other", 60),
    (83, "Cable Hip Adduction", "Other", 60),
    (29, "Cable Lateral Raise", "Lateral Deltoid", 60),
    (66, "Cable Pull Through", "Glutes", 60),
    (12, "Chin-Up", "Lats", 120),
    (45, "Close Grip Bench Press", "Triceps", 120),
    (41, "Concentration Curl", "Biceps", 60),
    (71, "Crunch", "Abs", 60),
    (19, "Deadlift", "Lats", 180),
    (5, "Decline Barbell Bench Press", "Chest", 90),
    (77, "Decline Crunch", "Abs", 60),
    (2, "Dumbbell Bench Press", "Chest", 120),
    (35, "Dumbbell Curl", "Biceps", 60),
    (9, "Dumbbell Fly", "Chest", 60),
    (47, "Dumbbell Kickback", "Triceps", 60),
    (15, "Dumbbell Row", "Lats", 90),
    (25, "Dumbbell Shoulder Press", "Anterior Deltoid", 90),
    (22, "Dumbbell Shrug", "Traps", 60),
    (38, "EZ Bar Curl", "Biceps", 90),
    (32, "Face Pull", "Posterior Deltoid", 60),
    (23, "Farmer's Walk", "Traps", 90),
    (27, "Front Raise", "Anterior Deltoid", 60),
    (54, "Front Squat", "Quadriceps", 120),
    (65, "Glute Kickback", "Glutes", 60),
    (58, "Goblet Squat", "Quadriceps", 90),
    (62, "Good Mornings", "Hamstrings", 120),
    (56, "Hack Squat", "Quadriceps", 120),
    (36, "Hammer Curl", "Biceps", 60),
    (78, "Hanging Knee Raise", "Abs", 60),
    (73, "Hanging Leg Raise", "Abs", 60),
    (80, "Hip Abduction Machine", "Other", 60),
    (82, "Hip Adduction Machine", "Other", 60),
    (3, "Incline Barbell Bench Press", "Chest", 120),
    (4, "Incline Dumbbell Bench Press", "Chest", 120),
    (39, "Incline Dumbbell Curl", "Biceps", 60),
    (67, "Kettlebell Swing", "Glutes", 90),
    (13, "Lat Pulldown", "Lats", 90),
    (28, "Lateral Raise", "Lateral Deltoid", 60),
    (53, "Leg Extension", "Quadriceps", 90),
    (52, "Leg Press", "Quadriceps", 120),
    (70, "Leg Press Calf Raise", "Calves", 60),
    (60, "Lying Leg Curl", "Hamstrings", 90),
    (10, "Machine Chest Press", "Chest", 90),
    (30, "Machine Lateral Raise", "Lateral Deltoid", 60),
    (20, "Machine Row", "Lats", 90),
    (24, "Overhead Press", "Anterior Deltoid", 120),
    (43, "Overhead Tricep Extension", "Triceps", 60),
    (8, "Pec Deck Fly", "Chest", 60),
    (72, "Plank", "Abs", 60),
    (40, "Preacher Curl", "Biceps", 60),
    (11, "Pull-Up", "Lats", 120),
    (6, "Push-Ups", "Chest", 60),
    (50, "Reverse Barbell Curl", "Forearms", 60),
    (33, "Reverse Dumbbell Fly", "Posterior Deltoid", 60),
    (31, "Reverse Pec Deck", "Posterior Deltoid", 60),
    (49, "Reverse Wrist Curl", "Forearms", 60),
    (59, "Romanian Deadlift", "Hamstrings", 120),
    (76, "Russian Twist", "Abs", 60),
    (16, "Seated Cable Row", "Lats", 90),
    (68, "Seated Calf Raise", "Calves", 60),
    (61, "Seated Leg Curl", "Hamstrings", 90),
    (44, "Skullcrusher", "Triceps", 90),
    (69, "Standing Calf Raise", "Calves", 60),
    (63, "Stiff-Legged Deadlift", "Hamstrings", 120),
    (18, "Straight Arm Pulldown", "Lats", 60),
    (17, "T-Bar Row", "Lats", 120),
    (46, "Tricep Dips", "Triceps", 90),
    (42, "Tricep Pushdown", "Triceps", 60),
    (57, "Walking Lunges", "Quadriceps", 90),
    (48, "Wrist Curl", "Forearms", 60),
]
