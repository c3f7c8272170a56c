from datetime import datetime
from typing import ClassVar, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from ..services.views import naive_utc


UserRole = Literal["admin", "faculty", "student"]
PersonStatus = Literal["active", "inactive", "on leave"]
CourseStatus = Literal["active", "pending", "archived"]
EnrollmentStatus = Literal["enrolled", "dropped", "completed"]
AttendanceStatus = Literal["present", "absent", "late", "excused"]
EventType = Literal["academic", "administrative", "extracurricular"]


def _now() -> datetime:
    return datetime.now()


class MessageResponse(BaseModel):
    message: str


class PartialUpdate(BaseModel):
    """PUT body: omitted fields keep their stored value.

    An explicit ``null`` is only accepted for columns listed in ``nullable_fields``.
    """

    nullable_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in sorted(self.model_fields_set):
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self


class PublicUser(BaseModel):
    id: int
    username: str
    email: str
    name: str
    role: str
    profile_image: Optional[str] = None


# Students


class StudentBase(BaseModel):
    student_id: str = Field(..., min_length=1)
    program: str
    year_level: int = Field(..., ge=1)
    status: PersonStatus = "active"
    enrollment_date: datetime = Field(default_factory=_now)


class StudentCreate(StudentBase):
    user_id: int


class StudentUpdate(PartialUpdate):
    student_id: Optional[str] = Field(None, min_length=1)
    program: Optional[str] = None
    year_level: Optional[int] = Field(None, ge=1)
    status: Optional[PersonStatus] = None
    enrollment_date: Optional[datetime] = None


class StudentOut(StudentBase):
    id: int
    user_id: int
    user: Optional[PublicUser] = None


# Faculty


class FacultyBase(BaseModel):
    faculty_id: str = Field(..., min_length=1)
    department: str
    position: str
    join_date: datetime = Field(default_factory=_now)
    status: PersonStatus = "active"


class FacultyCreate(FacultyBase):
    user_id: int


class FacultyUpdate(PartialUpdate):
    faculty_id: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = None
    position: Optional[str] = None
    join_date: Optional[datetime] = None
    status: Optional[PersonStatus] = None


class FacultyOut(FacultyBase):
    id: int
    user_id: int
    user: Optional[PublicUser] = None


# Courses


class CourseBase(BaseModel):
    code: str = Field(..., min_length=1)
    title: str
    description: Optional[str] = None
    credits: int = Field(..., ge=0)
    department: str
    status: CourseStatus = "active"


class CourseCreate(CourseBase):
    pass


class CourseUpdate(PartialUpdate):
    nullable_fields = ("description",)

    code: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    credits: Optional[int] = Field(None, ge=0)
    department: Optional[str] = None
    status: Optional[CourseStatus] = None


class CourseOut(CourseBase):
    id: int


# Course assignments


class CourseAssignmentCreate(BaseModel):
    course_id: int
    faculty_id: int
    semester: str
    year: int


class CourseAssignmentOut(CourseAssignmentCreate):
    id: int


# Enrollments


class EnrollmentCreate(BaseModel):
    student_id: int
    course_assignment_id: int
    enrollment_date: datetime = Field(default_factory=_now)
    status: EnrollmentStatus = "enrolled"


class EnrollmentUpdate(PartialUpdate):
    enrollment_date: Optional[datetime] = None
    status: Optional[EnrollmentStatus] = None


class EnrollmentOut(EnrollmentCreate):
    id: int


# Attendance


class AttendanceCreate(BaseModel):
    enrollment_id: int
    date: datetime = Field(default_factory=_now)
    status: AttendanceStatus
    notes: Optional[str] = None


class AttendanceUpdate(PartialUpdate):
    nullable_fields = ("notes",)

    date: Optional[datetime] = None
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None


class AttendanceOut(AttendanceCreate):
    id: int


class EnrollmentContext(BaseModel):
    student_code: Optional[str] = None
    student_name: Optional[str] = None
    course_code: Optional[str] = None
    course_title: Optional[str] = None


class AttendanceReportRow(AttendanceOut, EnrollmentContext):
    pass


# Grades


class GradeCreate(BaseModel):
    enrollment_id: int
    assignment_name: str = Field(..., min_length=1)
    score: int = Field(..., ge=0)
    max_score: int = Field(..., gt=0)
    weight: int = Field(..., ge=0, le=100)
    date: datetime = Field(default_factory=_now)


class GradeUpdate(PartialUpdate):
    assignment_name: Optional[str] = Field(None, min_length=1)
    score: Optional[int] = Field(None, ge=0)
    max_score: Optional[int] = Field(None, gt=0)
    weight: Optional[int] = Field(None, ge=0, le=100)
    date: Optional[datetime] = None


class GradeOut(GradeCreate):
    id: int


class GradeReportRow(GradeOut, EnrollmentContext):
    pass


# Events


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    type: EventType

    @model_validator(mode="after")
    def check_dates(self):
        if naive_utc(self.end_date) < naive_utc(self.start_date):
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdate(PartialUpdate):
    nullable_fields = ("description", "location")

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    type: Optional[EventType] = None


class EventOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    type: str


# Composite views


class StudentEnrollmentBlock(BaseModel):
    enrollment: EnrollmentOut
    course: Optional[CourseOut] = None
    faculty: Optional[FacultyOut] = None
    faculty_name: Optional[str] = None
    attendance: List[AttendanceOut] = []
    grades: List[GradeOut] = []
    semester: str
    year: int


class StudentDetails(StudentOut):
    enrollments: List[StudentEnrollmentBlock] = []


class CourseAssignmentWithFaculty(CourseAssignmentOut):
    faculty: Optional[FacultyOut] = None
    faculty_name: Optional[str] = None


class CourseDetails(CourseOut):
    assignments: List[CourseAssignmentWithFaculty] = []


class CourseAssignmentWithCourse(CourseAssignmentOut):
    course: Optional[CourseOut] = None


class FacultyDetails(FacultyOut):
    courses: List[CourseAssignmentWithCourse] = []


class CourseReportRow(CourseOut):
    student_count: int


# Dashboard


class StatusCount(BaseModel):
    count: int
    percentage: float


class PopularCourse(BaseModel):
    id: int
    code: str
    title: str
    student_count: int


class DashboardStats(BaseModel):
    total_students: int
    total_faculty: int
    total_courses: int
    active_courses: int
    attendance_rate: float
    course_statistics: Dict[str, StatusCount]
    popular_courses: List[PopularCourse]
