'''
TutorTrack backend: students, class sessions, balances and earnings for tutors.

Run with `uvicorn src.tutortrack_backend.main:app`.
'''
