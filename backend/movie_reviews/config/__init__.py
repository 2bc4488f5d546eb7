from movie_reviews.config.paths import *

VERSION = "1.0.0"
API_TITLE = "Movie Reviews API"
API_DESCRIPTION = "API for managing movies and their reviews"
