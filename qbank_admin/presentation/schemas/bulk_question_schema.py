from typing import List, Optional

from .common_schema import CamelModel, RecordStatus


class QuestionBulkUploadMeta(CamelModel):
    type_id: int
    internal_type_id: int
    passage_id: Optional[int] = None
    status: RecordStatus = "draft"


class BulkUploadResponse(CamelModel):
    total_rows: int
    inserted: int
    failed: int
    errors: List[str] = []
