"""Configuration for Step 03: STL export."""

from pydantic import BaseModel, ConfigDict, Field


class StlExportConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    export_ascii: bool = Field(True, description="Write ASCII STL (<stem>.stl)")
    export_binary: bool = Field(True, description="Write binary STL (<stem>-binary.stl)")
    solid_name: str = Field(
        "lithophane", pattern=r"^\S+$", description="Solid name used in ASCII STL and the binary header"
    )
    output_stem: str = Field("output", min_length=1, description="Output file stem")
    normalize_normals: bool = Field(False, description="Write unit-length facet normals")
