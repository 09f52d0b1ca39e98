from learnify.models.role import Role, RoleName  # noqa
from learnify.models.user import User  # noqa
from learnify.models.course import Course  # noqa
from learnify.models.course_content import CourseContent  # noqa
from learnify.models.enrollment import Enrollment  # noqa
