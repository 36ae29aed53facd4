"""Collection names, kept identical to the ones the first deployment created."""

USERS = "users"
WORDS = "words"
BLOGS = "blogs"
BLOG_COMMENTS = "blogcomments"
FORUM_POSTS = "forumposts"
FORUM_REPLIES = "forumreplies"
ACTIVITY_LOGS = "activitylogs"
FAVORITES = "favorites"
WORD_FEEDBACK = "wordfeedbacks"
WORD_HISTORY = "wordhistories"
WORD_ETYMOLOGY = "wordetymologies"
LEARNING_SESSIONS = "learningsessions"
