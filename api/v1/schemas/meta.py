from pydantic import BaseModel, ConfigDict, Field


class ConfigOut(BaseModel):
    openweather_api_key: str = Field("", alias="OPENWEATHER_API_KEY")

    model_config = ConfigDict(populate_by_name=True)
