# Task identifiers, matching the player's route paths.
TASK_IDS = (
    'toefl/reading/complete-words',
    'toefl/reading/daily-life',
    'toefl/reading/academic',
    'toefl/writing/build-sentence',
    'toefl/writing/email',
    'toefl/writing/discussion',
    'toefl/speaking/listen-repeat',
    'toefl/speaking/interview',
    'toeic/part5',
    'toeic/part6',
    'toeic/part7',
)

# The two-module adaptive reading task.
ADAPTIVE_TASK_ID = 'toefl/reading/daily-life'


def is_known_task(task_id) -> bool:
    return task_id in TASK_IDS
