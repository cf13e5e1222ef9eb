"""Parse & Practice: turn pasted question text into scored practice quizzes."""
